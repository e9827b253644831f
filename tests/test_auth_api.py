def test_login_with_configured_credentials(client):
    response = client.post("/api/auth/login", json={"email": "Admin@Activities.com ", "password": "admin123"})

    assert response.status_code == 200
    token = response.json()["token"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json() == {"is_admin": True}


def test_login_rejects_wrong_password(client):
    response = client.post("/api/auth/login", json={"email": "admin@activities.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid email or password"}


def test_anonymous_is_not_admin(client):
    assert client.get("/api/auth/me").json() == {"is_admin": False}
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer made-up"}).json() == {"is_admin": False}


def test_logout_revokes_token(admin_client):
    assert admin_client.get("/api/admin/activities").status_code == 200

    assert admin_client.post("/api/auth/logout").status_code == 204

    assert admin_client.get("/api/admin/activities").status_code == 401
    assert admin_client.get("/api/auth/me").json() == {"is_admin": False}
