def test_register(client):
    response = client.post("/api/register", json={"username": "alice", "password": "password123"})
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert isinstance(body["id"], int)
    assert "password" not in body


def test_register_duplicate_username(client):
    payload = {"username": "alice", "password": "password123"}
    client.post("/api/register", json=payload)
    response = client.post("/api/register", json=payload)
    assert response.status_code == 409
    assert response.json()["detail"] == "Username already registered"


def test_login(client):
    client.post("/api/register", json={"username": "login", "password": "password123"})
    response = client.post("/api/login", json={"username": "login", "password": "password123"})
    assert response.status_code == 200
    assert response.json()["token"]
    assert response.json()["tokenType"] == "bearer"


def test_login_wrong_password(client):
    client.post("/api/register", json={"username": "login", "password": "password123"})
    response = client.post("/api/login", json={"username": "login", "password": "nope-nope"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Wrong password"


def test_login_unknown_user(client):
    response = client.post("/api/login", json={"username": "ghost", "password": "password123"})
    assert response.status_code == 400


def test_current_user(client, make_user):
    user, headers = make_user("val")
    response = client.get("/api/user", headers=headers)
    assert response.status_code == 200
    assert response.json() == user


def test_current_user_requires_token(client):
    assert client.get("/api/user").status_code == 401
