from tests.conftest import ADMIN_EMAIL


def _create_admin(client, headers, email="second@certificados.com", password="secret123"):
    return client.post("/api/users", json={"email": email, "password": password}, headers=headers)


def test_list_never_exposes_password_hash(client, admin_headers):
    response = client.get("/api/users", headers=admin_headers)
    assert response.status_code == 200
    users = response.json()
    assert [u["email"] for u in users] == [ADMIN_EMAIL]
    assert set(users[0]) == {"id", "email", "role", "created_at"}


def test_create_admin_and_login(client, admin_headers):
    response = _create_admin(client, admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "ADMIN"
    assert "password" not in response.text

    login = client.post("/api/auth/login", json={"email": "second@certificados.com", "password": "secret123"})
    assert login.status_code == 200


def test_create_duplicate_email_is_conflict(client, admin_headers):
    response = _create_admin(client, admin_headers, email=ADMIN_EMAIL)
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_create_validates_payload(client, admin_headers):
    assert _create_admin(client, admin_headers, email="not-an-email").status_code == 400
    assert _create_admin(client, admin_headers, password="123").status_code == 400
    response = client.post(
        "/api/users", json={"email": "x@certificados.com", "password": "secret123", "role": "ROOT"}, headers=admin_headers
    )
    assert response.status_code == 400


def test_update_password(client, admin_headers):
    user_id = _create_admin(client, admin_headers).json()["id"]
    response = client.patch(f"/api/users/{user_id}", json={"password": "new-secret"}, headers=admin_headers)
    assert response.status_code == 200

    old = client.post("/api/auth/login", json={"email": "second@certificados.com", "password": "secret123"})
    new = client.post("/api/auth/login", json={"email": "second@certificados.com", "password": "new-secret"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_missing_user(client, admin_headers):
    response = client.patch("/api/users/nope", json={"role": "ADMIN"}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_user(client, admin_headers):
    user_id = _create_admin(client, admin_headers).json()["id"]
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 404
    assert [u["email"] for u in client.get("/api/users", headers=admin_headers).json()] == [ADMIN_EMAIL]


def test_admin_can_delete_own_account(client, admin_headers):
    me = client.get("/api/auth/me", headers=admin_headers).json()
    assert client.delete(f"/api/users/{me['id']}", headers=admin_headers).status_code == 204
    # o token continua assinado e válido; só a conta sumiu
    assert client.get("/api/auth/me", headers=admin_headers).status_code == 404


def test_user_routes_require_admin(client, viewer_headers):
    assert client.get("/api/users", headers=viewer_headers).status_code == 403
    assert _create_admin(client, viewer_headers).status_code == 403
    assert client.get("/api/users").status_code == 401


def test_email_is_compared_exactly_as_stored(client, admin_headers):
    # EmailStr normaliza só o domínio; o login compara com a forma gravada
    response = _create_admin(client, admin_headers, email="Mixed.Case@Certificados.COM")
    assert response.status_code == 201
    stored = response.json()["email"]
    assert stored == "Mixed.Case@certificados.com"

    def login(email):
        return client.post("/api/auth/login", json={"email": email, "password": "secret123"}).status_code

    assert login(stored) == 200
    assert login("mixed.case@certificados.com") == 401
    assert login("Mixed.Case@Certificados.COM") == 401


def test_duplicate_detection_uses_stored_form(client, admin_headers):
    assert _create_admin(client, admin_headers, email="ops@Certificados.com").status_code == 201
    assert _create_admin(client, admin_headers, email="ops@certificados.com").status_code == 409
