def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_db_ping(client):
    r = client.get("/db-ping")
    assert r.status_code == 200
    body = r.json()
    assert body["db"] == "ok"
    assert body["value"] == 1

def test_openapi_lists_campus_routes(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    spec = r.json()
    assert spec["info"]["title"] == "Campus Events Backend"
    for path in ("/universities", "/students", "/rsos/{rso_id}/join", "/events/rso-admin"):
        assert path in spec["paths"]

def test_domain_errors_use_detail_envelope(client):
    r = client.get("/users/me")
    assert r.status_code == 401
    assert r.json() == {"detail": "Not authenticated"}
    assert r.headers["www-authenticate"] == "Bearer"
