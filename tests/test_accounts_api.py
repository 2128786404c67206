def test_create_and_fetch_account(client, supabase):
    response = client.post("/api/accounts", json={"username": "builderman", "coins": 250})
    assert response.status_code == 201
    created = response.json()
    assert created["username"] == "builderman"
    assert created["coins"] == 250

    fetched = client.get("/api/accounts/builderman")
    assert fetched.status_code == 200
    assert fetched.json()["coins"] == 250
    assert len(supabase.tables["accounts"]) == 1


def test_duplicate_username_conflicts(client):
    client.post("/api/accounts", json={"username": "noob"})
    response = client.post("/api/accounts", json={"username": "noob", "level": 3})
    assert response.status_code == 409
    assert response.json()["error"] == "Account already exists"


def test_missing_account_is_404(client):
    response = client.get("/api/accounts/ghost")
    assert response.status_code == 404
    assert response.json() == {
        "error": "Account not found",
        "message": "No account found for 'ghost'",
    }


def test_delete_account(client, supabase):
    client.post("/api/accounts", json={"username": "temp"})
    response = client.delete("/api/accounts/temp")
    assert response.status_code == 200
    assert response.json() == {"success": True, "username": "temp"}
    assert supabase.tables["accounts"] == []
    assert client.delete("/api/accounts/temp").status_code == 404


def test_create_requires_username(client):
    response = client.post("/api/accounts", json={"coins": 5})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"

    response = client.post("/api/accounts", json={"username": ""})
    assert response.status_code == 400


def test_table_name_from_settings(upstream, supabase):
    from fastapi.testclient import TestClient

    from .conftest import build_app, make_settings

    app = build_app(make_settings(accounts_table="players"), upstream, supabase)
    with TestClient(app) as client:
        client.post("/api/accounts", json={"username": "builderman"})
    assert [row["username"] for row in supabase.tables["players"]] == ["builderman"]
