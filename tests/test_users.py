from tests.conftest import auth_header


def test_list_users_hides_passwords(client, make_user):
    make_user("alice")
    make_user("bob")
    res = client.get("/api/users")
    assert res.status_code == 200
    users = res.json()
    assert [u["username"] for u in users] == ["alice", "bob"]
    for u in users:
        assert "password" not in u and "hashedPassword" not in u

def test_get_user_populates_references(client, make_user, make_rent):
    user_id, token = make_user()
    rent = make_rent(user_id, token)
    res = client.get(f"/api/users/{user_id}")
    assert res.status_code == 200
    body = res.json()
    assert body["username"] == "alice"
    assert body["isHost"] is False
    assert [p["id"] for p in body["listedProperties"]] == [rent["id"]]
    assert body["bookings"] == []
    assert body["reviews"] == []

def test_get_user_not_found(client):
    res = client.get("/api/users/does-not-exist")
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"

def test_update_user(client, make_user):
    user_id, token = make_user()
    payload = {"firstName": "Alice", "bio": "Loves the sea", "isHost": True, "address": {"city": "Porto", "zipCode": "4000"}}
    res = client.put(f"/api/users/{user_id}", json=payload, headers=auth_header(token))
    assert res.status_code == 200
    body = res.json()
    assert body["firstName"] == "Alice"
    assert body["isHost"] is True
    assert body["address"]["zipCode"] == "4000"
    assert body["username"] == "alice"

def test_update_user_rejects_password(client, make_user):
    user_id, token = make_user()
    res = client.put(f"/api/users/{user_id}", json={"password": "new"}, headers=auth_header(token))
    assert res.status_code == 400
    assert res.json()["detail"] == "Cannot update password through this endpoint"

def test_update_user_rejects_taken_username(client, make_user):
    make_user("bob")
    user_id, token = make_user("alice")
    res = client.put(f"/api/users/{user_id}", json={"username": "bob"}, headers=auth_header(token))
    assert res.status_code == 400
    res = client.put(f"/api/users/{user_id}", json={"username": " bob "}, headers=auth_header(token))
    assert res.status_code == 400

def test_update_user_trims_username(client, make_user):
    user_id, token = make_user()
    res = client.put(f"/api/users/{user_id}", json={"username": "  carol "}, headers=auth_header(token))
    assert res.status_code == 200
    assert res.json()["username"] == "carol"
    res = client.put(f"/api/users/{user_id}", json={"username": "   "}, headers=auth_header(token))
    assert res.status_code == 400

def test_update_user_requires_token(client, make_user):
    user_id, _ = make_user()
    res = client.put(f"/api/users/{user_id}", json={"bio": "x"})
    assert res.status_code == 401

def test_update_other_user_forbidden(client, make_user):
    bob_id, _ = make_user("bob")
    _, alice_token = make_user("alice")
    res = client.put(f"/api/users/{bob_id}", json={"bio": "x"}, headers=auth_header(alice_token))
    assert res.status_code == 403

def test_delete_user(client, make_user):
    user_id, token = make_user()
    res = client.delete(f"/api/users/{user_id}", headers=auth_header(token))
    assert res.status_code == 200
    assert res.json()["message"] == "User deleted successfully"
    assert client.get(f"/api/users/{user_id}").status_code == 404
    # The token outlives the account
    res = client.delete(f"/api/users/{user_id}", headers=auth_header(token))
    assert res.status_code == 404

def test_watchlist(client, make_user):
    user_id, token = make_user()
    headers = auth_header(token)
    res = client.post(f"/api/users/{user_id}/watchlist", json={"itemId": "rent-1"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["watchlist"] == [{"id": "rent-1"}]
    # Adding twice keeps a single entry
    client.post(f"/api/users/{user_id}/watchlist", json={"itemId": "rent-1"}, headers=headers)
    client.post(f"/api/users/{user_id}/watchlist", json={"itemId": "rent-2"}, headers=headers)
    assert client.get(f"/api/users/{user_id}/watchlist").json() == [{"id": "rent-1"}, {"id": "rent-2"}]

    res = client.delete(f"/api/users/{user_id}/watchlist/rent-1", headers=headers)
    assert res.status_code == 200
    assert res.json()["watchlist"] == [{"id": "rent-2"}]

def test_watchlist_requires_item_id(client, make_user):
    user_id, token = make_user()
    res = client.post(f"/api/users/{user_id}/watchlist", json={}, headers=auth_header(token))
    assert res.status_code == 400

def test_likes(client, make_user):
    user_id, token = make_user()
    headers = auth_header(token)
    client.post(f"/api/users/{user_id}/likes", json={"propertyId": "p1"}, headers=headers)
    client.post(f"/api/users/{user_id}/likes", json={"propertyId": "p1"}, headers=headers)
    res = client.post(f"/api/users/{user_id}/likes", json={"propertyId": "p2"}, headers=headers)
    assert res.json()["likes"] == ["p1", "p2"]

    res = client.delete(f"/api/users/{user_id}/likes/p1", headers=headers)
    assert res.json()["likes"] == ["p2"]
    assert client.get(f"/api/users/{user_id}/likes").json() == ["p2"]

def test_likes_require_property_id(client, make_user):
    user_id, token = make_user()
    res = client.post(f"/api/users/{user_id}/likes", json={}, headers=auth_header(token))
    assert res.status_code == 400

def test_lists_of_missing_user(client):
    assert client.get("/api/users/nobody/watchlist").status_code == 404
    assert client.get("/api/users/nobody/likes").status_code == 404
