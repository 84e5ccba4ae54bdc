from services.bootstrap import ensure_admin
from tests.conftest import TEST_PASSWORD, TEST_PHONE


class TestRegister:
    def test_register_returns_client_profile(self, registered_user):
        assert registered_user["fio"] == "Ivan Petrov"
        assert registered_user["phone"] == TEST_PHONE
        assert registered_user["role"] == "client"
        assert registered_user["balance"] == 0
        assert registered_user["creditLimit"] == 100
        assert registered_user["status"] == "active"
        assert registered_user["tariff"] == {"id": "standard", "name": "Basic", "price": 19.99}

    def test_register_stores_hashed_password(self, registered_user, mongo_db, run):
        stored = run(mongo_db.users.find_one({"phone": TEST_PHONE}))
        assert stored["password"] != TEST_PASSWORD
        assert stored["password"].startswith("$2")

    def test_duplicate_phone_is_rejected(self, client, registered_user):
        response = client.post(
            "/api/register",
            json={"fio": "Someone Else", "phone": TEST_PHONE, "password": "x"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User with this phone number already exists"

    def test_missing_fields_fail_validation(self, client):
        response = client.post("/api/register", json={"phone": TEST_PHONE})
        assert response.status_code == 422


class TestLogin:
    def test_client_login_redirects_to_cabinet(self, client, registered_user):
        response = client.post("/api/login", json={"phone": TEST_PHONE, "password": TEST_PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["redirect"] == "/client"
        assert body["user"]["phone"] == TEST_PHONE
        assert "password" not in body["user"]

    def test_wrong_password(self, client, registered_user):
        response = client.post("/api/login", json={"phone": TEST_PHONE, "password": "wrong"})
        assert response.status_code == 401

    def test_unknown_phone(self, client):
        response = client.post("/api/login", json={"phone": "+375000000000", "password": "x"})
        assert response.status_code == 401

    def test_database_unavailable(self, app, client):
        app.state.database.is_connected = False
        response = client.post("/api/login", json={"phone": TEST_PHONE, "password": TEST_PASSWORD})
        assert response.status_code == 503
        assert response.json()["detail"] == "Database is unavailable. Please try again later."


def test_admin_login_redirects_to_admin_panel(client, mongo_db, settings, run):
    run(ensure_admin(mongo_db, settings))
    response = client.post("/api/login", json={"phone": settings.admin_phone, "password": settings.admin_password})

    assert response.status_code == 200
    assert response.json()["redirect"] == "/admin"
    assert response.json()["user"]["role"] == "admin"
