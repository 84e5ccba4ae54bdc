import pytest

from services.bootstrap import backfill_tariffs, ensure_admin
from utils.encryption import verify_password


@pytest.mark.asyncio
async def test_ensure_admin_creates_account_once(mongo_db, settings):
    assert await ensure_admin(mongo_db, settings) is True
    assert await ensure_admin(mongo_db, settings) is False

    admins = await mongo_db.users.find({"role": "admin"}).to_list(length=None)
    assert len(admins) == 1
    assert admins[0]["phone"] == settings.admin_phone
    assert verify_password(settings.admin_password, admins[0]["password"])


@pytest.mark.asyncio
async def test_backfill_sets_default_tariff(mongo_db, settings):
    await mongo_db.users.insert_many(
        [
            {"fio": "No tariff", "phone": "1"},
            {"fio": "Null tariff", "phone": "2", "tariff": None},
            {"fio": "Empty tariff", "phone": "3", "tariff": ""},
            {"fio": "Premium", "phone": "4", "tariff": "premium"},
        ]
    )

    modified = await backfill_tariffs(mongo_db, settings)

    assert modified == 3
    users = {u["phone"]: u["tariff"] for u in await mongo_db.users.find({}).to_list(length=None)}
    assert users == {"1": "standard", "2": "standard", "3": "standard", "4": "premium"}
