from datetime import datetime, timedelta, timezone

import pytest

from core.config import Settings
from services.users import build_user_document


@pytest.fixture
def clients(mongo_db, run, settings: Settings):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    seeded = [
        ("Anna Ivanova", "+375291000001", 50, "standard"),
        ("Boris Orlov", "+375291000002", -30, "premium"),
        ("Vera Orlova", "+375291000003", -5, "economy"),
    ]
    for index, (fio, phone, balance, tariff) in enumerate(seeded):
        document = build_user_document(settings, fio, phone, "pass")
        document.update(balance=balance, tariff=tariff, created_at=base + timedelta(days=index))
        run(mongo_db.users.insert_one(document))
    admin = build_user_document(settings, "Admin", "+375256082909", "pass")
    admin.update(role="admin", balance=-1000)
    run(mongo_db.users.insert_one(admin))
    return seeded


def test_clients_newest_first_without_admin(client, clients):
    response = client.get("/api/clients")
    assert response.status_code == 200
    phones = [c["phone"] for c in response.json()]
    assert phones == ["+375291000003", "+375291000002", "+375291000001"]
    assert response.json()[0]["tariffInfo"]["id"] == "economy"


def test_clients_search_is_case_insensitive(client, clients):
    response = client.get("/api/clients", params={"search": "orlov"})
    assert {c["fio"] for c in response.json()} == {"Boris Orlov", "Vera Orlova"}


def test_clients_search_is_literal(client, clients):
    response = client.get("/api/clients", params={"search": "+37529100000"})
    assert len(response.json()) == 3


def test_clients_respect_limit(client, clients, settings):
    settings.client_list_limit = 2
    assert len(client.get("/api/clients").json()) == 2


def test_debtors_most_negative_first(client, clients):
    debtors = client.get("/api/reports/debtors").json()
    assert [d["phone"] for d in debtors] == ["+375291000002", "+375291000003"]
    assert debtors[0]["balance"] == -30


def test_debtors_report_is_cached(app, client, clients, mongo_db, run):
    client.get("/api/reports/debtors")
    run(mongo_db.users.update_one({"phone": "+375291000003"}, {"$set": {"balance": 10}}))

    debtors = client.get("/api/reports/debtors").json()
    assert len(debtors) == 2
    assert app.state.response_cache.get("/api/reports/debtors") is not None


def test_encoded_plus_and_space_searches_are_cached_separately(client, clients):
    assert client.get("/api/clients?search=Boris%2BOrlov").json() == []

    response = client.get("/api/clients?search=Boris+Orlov")
    assert [c["fio"] for c in response.json()] == ["Boris Orlov"]


def test_encoded_ampersand_search_is_cached_separately(client, clients):
    assert client.get("/api/clients?search=Orlov%26x").json() == []

    response = client.get("/api/clients?search=Orlov&x")
    assert {c["fio"] for c in response.json()} == {"Boris Orlov", "Vera Orlova"}
