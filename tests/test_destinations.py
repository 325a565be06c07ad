def create(client, **extra):
    data = {"name": "Kyoto", "country": "Japan", "price": 900, "rating": 4.8, "photos": ["a.jpg"]}
    data.update(extra)
    return client.post("/api/destinations", json=data)

def test_create_destination(client):
    res = create(client)
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Kyoto"
    assert body["photos"] == ["a.jpg"]
    assert body["likes"] == [] and body["comments"] == []

def test_create_destination_missing_fields(client):
    res = client.post("/api/destinations", json={"name": "Kyoto"})
    assert res.status_code == 400

def test_list_and_get(client):
    dest_id = create(client).json()["id"]
    create(client, name="Osaka")
    assert [d["name"] for d in client.get("/api/destinations").json()] == ["Kyoto", "Osaka"]
    assert client.get(f"/api/destinations/{dest_id}").json()["country"] == "Japan"

def test_get_missing(client):
    res = client.get("/api/destinations/missing")
    assert res.status_code == 404
    assert res.json()["detail"] == "Destination not found"

def test_update_destination(client):
    dest_id = create(client).json()["id"]
    res = client.put(f"/api/destinations/{dest_id}", json={"guide": "Temples first", "discount": 10})
    assert res.status_code == 200
    body = res.json()
    assert body["guide"] == "Temples first"
    assert body["discount"] == 10
    assert body["name"] == "Kyoto"
    assert client.put("/api/destinations/missing", json={"guide": "x"}).status_code == 404

def test_delete_destination(client):
    dest_id = create(client).json()["id"]
    res = client.delete(f"/api/destinations/{dest_id}")
    assert res.status_code == 200
    assert client.delete(f"/api/destinations/{dest_id}").status_code == 404

def test_like_and_unlike(client):
    dest_id = create(client).json()["id"]
    client.post(f"/api/destinations/{dest_id}/like", json={"userId": "u1"})
    res = client.post(f"/api/destinations/{dest_id}/like", json={"userId": "u1"})
    assert res.json()["likes"] == ["u1"]
    res = client.delete(f"/api/destinations/{dest_id}/unlike/u1")
    assert res.json()["likes"] == []

def test_like_requires_user_id(client):
    dest_id = create(client).json()["id"]
    assert client.post(f"/api/destinations/{dest_id}/like", json={}).status_code == 400
    assert client.post("/api/destinations/missing/like", json={"userId": "u1"}).status_code == 404
