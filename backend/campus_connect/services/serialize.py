from datetime import datetime


def to_public(row, exclude=()):
    """Column values of an ORM row as a JSON-ready dict."""
    if row is None:
        return None
    d = {}
    for column in row.__table__.columns:
        if column.key in exclude:
            continue
        value = getattr(row, column.key)
        if isinstance(value, datetime):
            value = value.isoformat()
        d[column.key] = value
    return d
