import itertools

import pytest
from fastapi.testclient import TestClient

from campus_connect.core.config import Settings
from campus_connect.db.models import Profile
from campus_connect.main import create_app


@pytest.fixture
def settings():
    s = Settings()
    s.DATABASE_URL = "sqlite://"
    s.SECRET_KEY = "test-secret"
    s.BCRYPT_ROUNDS = 4
    s.FEED_PAGE_SIZE = 10
    return s


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def SessionLocal(app, client):
    return app.state.SessionLocal


@pytest.fixture
def register(client):
    counter = itertools.count(1)

    def _register(full_name="Test User", username=None, password="secret123"):
        n = next(counter)
        email = f"user{n}@campus.edu"
        res = client.post("/auth/register", json={
            "email": email,
            "password": password,
            "full_name": full_name,
            "username": username,
        })
        assert res.status_code == 201, res.text
        user_id = res.json()["user"]["id"]

        res = client.post("/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        token = res.json()["data"]["access_token"]
        return {
            "id": user_id,
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _register


@pytest.fixture
def set_role(SessionLocal):
    def _set_role(user, **flags):
        with SessionLocal() as db:
            profile = db.query(Profile).filter(Profile.user_id == user["id"]).one()
            for key, value in flags.items():
                setattr(profile, key, value)
            db.commit()

    return _set_role


@pytest.fixture
def admin(register, set_role):
    user = register(full_name="Ada Admin")
    set_role(user, is_admin=True)
    return user


@pytest.fixture
def tutor(register, set_role):
    user = register(full_name="Tom Tutor")
    set_role(user, is_tutor=True)
    return user
