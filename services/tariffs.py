"""Tariff catalogue."""
from typing import Any, Dict, List, Optional

DEFAULT_TARIFF_ID = "standard"

TARIFFS: Dict[str, Dict[str, Any]] = {
    "standard": {
        "id": "standard",
        "name": "Basic",
        "price": 19.99,
        "description": "5 GB of internet, 200 minutes, 50 SMS",
        "features": ["5 GB of internet", "200 minutes", "50 SMS", "Calls to in-network numbers"],
    },
    "premium": {
        "id": "premium",
        "name": "Premium",
        "price": 49.99,
        "description": "20 GB of internet, 1000 minutes, 200 SMS",
        "features": ["20 GB of internet", "1000 minutes", "200 SMS", "Unlimited calls", "Mobile TV"],
    },
    "economy": {
        "id": "economy",
        "name": "Economy",
        "price": 9.99,
        "description": "2 GB of internet, 100 minutes, 20 SMS",
        "features": ["2 GB of internet", "100 minutes", "20 SMS", "Calls to in-network numbers"],
    },
}


def is_known_tariff(tariff_id: Optional[str]) -> bool:
    return tariff_id in TARIFFS


def get_tariff_info(tariff_id: Optional[str]) -> Dict[str, Any]:
    """Short tariff summary; unknown or missing ids fall back to the default tariff."""
    tariff = TARIFFS.get(tariff_id or "", TARIFFS[DEFAULT_TARIFF_ID])
    return {"id": tariff["id"], "name": tariff["name"], "price": tariff["price"]}


def list_tariffs() -> List[Dict[str, Any]]:
    return [dict(tariff, features=list(tariff["features"])) for tariff in TARIFFS.values()]
