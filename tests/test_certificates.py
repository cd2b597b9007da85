import pytest

CERT = {
    "cpf": "123.456.789-01",
    "registro": "REG-001",
    "matricula": "2023001",
    "nome": "Maria da Silva",
    "curso": "Enfermagem",
    "inicio": "2023-02-01",
    "fim": "2023-12-15",
}


def _create(client, headers, **overrides):
    response = client.post("/api/certificates", json={**CERT, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_normalizes_cpf(client, admin_headers):
    created = _create(client, admin_headers)
    assert created["cpf"] == "12345678901"
    assert created["inicio"] == "2023-02-01"
    assert created["id"]


def test_create_accepts_iso_datetimes(client, admin_headers):
    created = _create(client, admin_headers, inicio="2023-02-01T00:00:00.000Z", fim="2023-12-15T00:00:00Z")
    assert created["inicio"] == "2023-02-01"
    assert created["fim"] == "2023-12-15"


@pytest.mark.parametrize(
    "overrides",
    [{"cpf": "123"}, {"cpf": "123.456.789-0x"}, {"nome": ""}, {"inicio": "not-a-date"}],
)
def test_create_rejects_invalid_input(client, admin_headers, overrides):
    response = client.post("/api/certificates", json={**CERT, **overrides}, headers=admin_headers)
    assert response.status_code == 400
    assert client.get("/api/certificates", headers=admin_headers).json() == []


def test_create_requires_every_field(client, admin_headers):
    payload = dict(CERT)
    payload.pop("curso")
    response = client.post("/api/certificates", json=payload, headers=admin_headers)
    assert response.status_code == 400


def test_mutations_require_admin(client, viewer_headers):
    assert client.post("/api/certificates", json=CERT, headers=viewer_headers).status_code == 403
    assert client.put("/api/certificates/abc", json={"curso": "X"}, headers=viewer_headers).status_code == 403
    assert client.delete("/api/certificates/abc", headers=viewer_headers).status_code == 403


def test_mutations_require_authentication(client):
    assert client.post("/api/certificates", json=CERT).status_code == 401
    assert client.put("/api/certificates/abc", json={"curso": "X"}).status_code == 401
    assert client.delete("/api/certificates/abc").status_code == 401


def test_lookup_is_public_and_accepts_any_mask(client, admin_headers):
    _create(client, admin_headers)
    for raw in ("12345678901", "123.456.789-01", "123 456 789 01"):
        response = client.get(f"/api/certificates/lookup/{raw}")
        assert response.status_code == 200
        assert [c["registro"] for c in response.json()] == ["REG-001"]


def test_lookup_invalid_cpf_is_bad_request(client):
    response = client.get("/api/certificates/lookup/123")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_lookup_unknown_cpf_is_not_found(client):
    response = client.get("/api/certificates/lookup/98765432100")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_same_cpf_multiple_courses_ordered_by_start_desc(client, admin_headers):
    _create(client, admin_headers, registro="REG-OLD", curso="Técnico", inicio="2019-03-01", fim="2020-12-01")
    _create(client, admin_headers, registro="REG-NEW", curso="Especialização", inicio="2024-03-01", fim="2024-12-01")
    _create(client, admin_headers, registro="REG-MID", curso="Graduação", inicio="2021-03-01", fim="2023-12-01")
    _create(client, admin_headers, cpf="111.222.333-44", registro="OTHER")

    response = client.get("/api/certificates/lookup/123.456.789-01")
    assert response.status_code == 200
    assert [c["registro"] for c in response.json()] == ["REG-NEW", "REG-MID", "REG-OLD"]


def test_list_returns_all_records(client, admin_headers):
    _create(client, admin_headers, registro="A")
    _create(client, admin_headers, cpf="11122233344", registro="B")
    response = client.get("/api/certificates", headers=admin_headers)
    assert response.status_code == 200
    assert {c["registro"] for c in response.json()} == {"A", "B"}


def test_partial_update_touches_only_supplied_fields(client, admin_headers):
    created = _create(client, admin_headers)
    response = client.put(f"/api/certificates/{created['id']}", json={"curso": "Farmácia"}, headers=admin_headers)
    assert response.status_code == 200
    updated = response.json()
    assert updated["curso"] == "Farmácia"
    for field in ("cpf", "registro", "matricula", "nome", "inicio", "fim"):
        assert updated[field] == created[field]


def test_update_normalizes_cpf(client, admin_headers):
    created = _create(client, admin_headers)
    response = client.put(f"/api/certificates/{created['id']}", json={"cpf": "999.888.777-66"}, headers=admin_headers)
    assert response.json()["cpf"] == "99988877766"
    assert client.get("/api/certificates/lookup/99988877766").status_code == 200
    assert client.get("/api/certificates/lookup/12345678901").status_code == 404


def test_update_rejects_invalid_cpf(client, admin_headers):
    created = _create(client, admin_headers)
    response = client.put(f"/api/certificates/{created['id']}", json={"cpf": "12"}, headers=admin_headers)
    assert response.status_code == 400


def test_update_missing_certificate(client, admin_headers):
    response = client.put("/api/certificates/does-not-exist", json={"curso": "X"}, headers=admin_headers)
    assert response.status_code == 404


def test_delete(client, admin_headers):
    created = _create(client, admin_headers)
    assert client.delete(f"/api/certificates/{created['id']}", headers=admin_headers).status_code == 204
    assert client.get("/api/certificates/lookup/12345678901").status_code == 404
    assert client.delete(f"/api/certificates/{created['id']}", headers=admin_headers).status_code == 404


def test_create_rejects_non_ascii_digit_cpf(client, admin_headers):
    response = client.post(
        "/api/certificates", json={**CERT, "cpf": "１２３.４５６.７８９-０１"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert client.get("/api/certificates", headers=admin_headers).json() == []


def test_lookup_rejects_non_ascii_digit_cpf(client):
    assert client.get("/api/certificates/lookup/١٢٣٤٥٦٧٨٩٠١").status_code == 400
