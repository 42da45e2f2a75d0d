def test_get_own_profile(client, register):
    user = register(full_name="Pat Doe", username="pat")
    res = client.get("/auth/profile", headers=user["headers"])
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["user_id"] == user["id"]
    assert data["username"] == "pat"
    assert data["full_name"] == "Pat Doe"


def test_current_user_merges_identity_and_profile(client, register):
    user = register(full_name="Pat Doe")
    data = client.get("/auth/current-user", headers=user["headers"]).json()["data"]
    assert data["id"] == user["id"]
    assert data["email"] == user["email"]
    assert data["full_name"] == "Pat Doe"
    assert data["is_tutor"] is False
    assert "hashed_password" not in data


def test_profile_by_username(client, register):
    register(full_name="Sam", username="sam")
    res = client.get("/auth/profile/sam")
    assert res.status_code == 200
    assert res.json()["data"]["full_name"] == "Sam"


def test_profile_by_unknown_username(client):
    res = client.get("/auth/profile/nobody")
    assert res.status_code == 404
    assert res.json() == {"error": "Profile not found"}


def test_update_profile(client, register):
    user = register(full_name="Old Name")
    res = client.put("/auth/profile", json={"full_name": "New Name", "username": "newbie"},
                     headers=user["headers"])
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["full_name"] == "New Name"
    assert data["username"] == "newbie"


def test_update_profile_ignores_role_flags(client, register):
    user = register()
    res = client.put("/auth/profile", json={"is_admin": True, "is_tutor": True, "full_name": "X"},
                     headers=user["headers"])
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["is_admin"] is False
    assert data["is_tutor"] is False
    assert data["full_name"] == "X"


def test_update_profile_username_taken(client, register):
    register(username="first")
    user = register()
    res = client.put("/auth/profile", json={"username": "first"}, headers=user["headers"])
    assert res.status_code == 400
    assert res.json() == {"error": "Username already taken"}


def test_become_tutor_is_idempotent(client, register):
    user = register()
    for _ in range(2):
        res = client.post("/auth/become-tutor", headers=user["headers"])
        assert res.status_code == 200
        assert res.json()["data"]["is_tutor"] is True


def test_become_tutor_requires_auth(client):
    assert client.post("/auth/become-tutor").status_code == 401
