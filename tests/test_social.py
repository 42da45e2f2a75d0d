from campus_connect.db.models import Comment, Like, Post


def test_admin_post_like_roundtrip(client, admin, register):
    viewer = register()

    res = client.post("/auth/create-post", json={"content": "hello"}, headers=admin["headers"])
    assert res.status_code == 201
    post_id = res.json()["data"]["id"]

    post = client.get("/auth/feed", params={"page": 1}, headers=viewer["headers"]).json()["data"][0]
    assert post["content"] == "hello"
    assert post["likedByUser"] is False

    res = client.post(f"/auth/like/{post_id}", headers=viewer["headers"])
    assert res.status_code == 201

    post = client.get("/auth/feed", params={"page": 1}, headers=viewer["headers"]).json()["data"][0]
    assert post["likedByUser"] is True

    res = client.delete(f"/auth/like/{post_id}", headers=viewer["headers"])
    assert res.status_code == 200

    post = client.get("/auth/feed", headers=viewer["headers"]).json()["data"][0]
    assert post["likedByUser"] is False
    assert post["like_count"] == 0


def test_non_admin_cannot_create_post(client, register, SessionLocal):
    user = register()
    res = client.post("/auth/create-post", json={"content": "spam"}, headers=user["headers"])
    assert res.status_code == 403
    assert "error" in res.json()

    with SessionLocal() as db:
        assert db.query(Post).count() == 0


def test_create_post_requires_auth(client):
    assert client.post("/auth/create-post", json={"content": "x"}).status_code == 401


def test_duplicate_likes_are_kept(client, admin, SessionLocal):
    post_id = client.post("/auth/create-post", json={"content": "p"},
                          headers=admin["headers"]).json()["data"]["id"]
    client.post(f"/auth/like/{post_id}", headers=admin["headers"])
    client.post(f"/auth/like/{post_id}", headers=admin["headers"])

    with SessionLocal() as db:
        assert db.query(Like).filter(Like.post_id == post_id).count() == 2

    # unlike removes every like by the pair
    client.delete(f"/auth/like/{post_id}", headers=admin["headers"])
    with SessionLocal() as db:
        assert db.query(Like).filter(Like.post_id == post_id).count() == 0


def test_unlike_without_like_succeeds(client, register):
    user = register()
    assert client.delete("/auth/like/999", headers=user["headers"]).status_code == 200


def test_comment_requires_content(client, admin, register):
    user = register()
    post_id = client.post("/auth/create-post", json={"content": "p"},
                          headers=admin["headers"]).json()["data"]["id"]

    for body in ({}, {"content": ""}, {"content": "   "}):
        res = client.post(f"/auth/comment/{post_id}", json=body, headers=user["headers"])
        assert res.status_code == 400
        assert res.json() == {"error": "Comment content is required"}

    res = client.post(f"/auth/comment/{post_id}", json={"content": "hi"}, headers=user["headers"])
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["user_id"] == user["id"]
    assert data["post_id"] == post_id
    assert data["created_at"]


def test_delete_post_admin_only(client, admin, register, SessionLocal):
    user = register()
    post_id = client.post("/auth/create-post", json={"content": "p"},
                          headers=admin["headers"]).json()["data"]["id"]
    client.post(f"/auth/comment/{post_id}", json={"content": "c"}, headers=user["headers"])
    client.post(f"/auth/like/{post_id}", headers=user["headers"])

    assert client.delete(f"/auth/delete-post/{post_id}", headers=user["headers"]).status_code == 403

    res = client.delete(f"/auth/delete-post/{post_id}", headers=admin["headers"])
    assert res.status_code == 200

    with SessionLocal() as db:
        assert db.query(Post).count() == 0
        assert db.query(Comment).count() == 0
        assert db.query(Like).count() == 0


def test_delete_missing_post_is_not_an_error(client, admin):
    assert client.delete("/auth/delete-post/12345", headers=admin["headers"]).status_code == 200
