from collections import defaultdict

from sqlalchemy.orm import Session

from campus_connect.core.errors import InvalidInput
from campus_connect.db.models import Comment, Like, Post, Profile
from campus_connect.services.serialize import to_public

# Values some clients send for an unset search box.
EMPTY_FILTERS = ("", "null", "undefined")


def has_filter(filter):
    return filter is not None and filter.strip() not in EMPTY_FILTERS


def escape_like(value):
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def page_bounds(page, page_size):
    """Inclusive row range for a 1-based page.

    Both ends are inclusive, so a page holds ``page_size + 1`` rows.
    """
    if page < 1:
        raise InvalidInput("page must be 1 or greater")
    return (page - 1) * page_size, page * page_size


def list_feed(db: Session, viewer_id=None, page=1, filter=None, page_size=10):
    query = db.query(Post)
    if has_filter(filter):
        pattern = f"%{escape_like(filter)}%"
        query = query.filter(Post.content.ilike(pattern, escape="\\"))

    range_start, range_end = page_bounds(page, page_size)
    posts = (
        query.order_by(Post.created_at.desc(), Post.id.desc())
        .offset(range_start)
        .limit(range_end - range_start + 1)
        .all()
    )
    if not posts:
        return []

    post_ids = [p.id for p in posts]

    comments = defaultdict(list)
    rows = (
        db.query(Comment, Profile.full_name)
        .outerjoin(Profile, Profile.user_id == Comment.user_id)
        .filter(Comment.post_id.in_(post_ids))
        .order_by(Comment.created_at, Comment.id)
        .all()
    )
    for comment, full_name in rows:
        c = to_public(comment)
        c["author_name"] = full_name
        comments[comment.post_id].append(c)

    likes = defaultdict(list)
    for post_id, user_id in db.query(Like.post_id, Like.user_id).filter(Like.post_id.in_(post_ids)):
        likes[post_id].append({"user_id": user_id})

    author_ids = {p.user_id for p in posts}
    authors = dict(
        db.query(Profile.user_id, Profile.full_name).filter(Profile.user_id.in_(author_ids)).all()
    )

    feed = []
    for post in posts:
        view = to_public(post)
        view["author_name"] = authors.get(post.user_id)
        view["comments"] = comments[post.id]
        view["likes"] = likes[post.id]
        view["like_count"] = len(likes[post.id])
        if viewer_id is not None:
            view["likedByUser"] = any(like["user_id"] == viewer_id for like in likes[post.id])
        feed.append(view)
    return feed
