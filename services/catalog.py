"""
Static informational data served to the client cabinet.

The billing backend is not integrated yet, so call history, payments, services,
usage meters and notifications are fixed fixtures shared by every subscriber.
"""
from typing import Any, Dict, List

CALL_HISTORY: List[Dict[str, str]] = [
    {"date": "15.10.2023 14:23", "number": "+375 (29) 123-45-67", "duration": "5:12", "cost": "0.00"},
    {"date": "15.10.2023 12:15", "number": "+375 (33) 987-65-43", "duration": "2:45", "cost": "0.00"},
    {"date": "14.10.2023 18:30", "number": "+375 (25) 456-78-90", "duration": "10:22", "cost": "0.00"},
    {"date": "14.10.2023 09:15", "number": "+375 (17) 555-35-35", "duration": "3:18", "cost": "0.00"},
]

PAYMENT_HISTORY: List[Dict[str, str]] = [
    {"date": "10.10.2023", "amount": "1000.00", "method": "Bank card", "status": "Successful"},
    {"date": "01.10.2023", "amount": "299.00", "method": "Autopayment", "status": "Successful"},
    {"date": "15.09.2023", "amount": "500.00", "method": "ERIP", "status": "Successful"},
]

SERVICES: List[Dict[str, Any]] = [
    {"name": "Internet package", "description": "5 GB of high-speed internet", "active": True, "price": "Included"},
    {"name": "Calls", "description": "200 minutes to all national numbers", "active": True, "price": "Included"},
    {"name": "Messages", "description": "50 SMS per month", "active": True, "price": "Included"},
    {"name": "Antivirus", "description": "Device protection against threats", "active": False, "price": "5.99/month"},
    {"name": "Mobile TV", "description": "Access to TV channels", "active": False, "price": "9.99/month"},
]

USAGE_METERS: Dict[str, Dict[str, float]] = {
    "internet": {"used": 2.1, "total": 5},
    "calls": {"used": 127, "total": 200},
    "sms": {"used": 23, "total": 50},
}

NOTIFICATIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "type": "info",
        "title": "Tariff update",
        "message": "New tariff plans are introduced from November 1",
        "date": "2023-10-20",
        "read": False,
    },
    {
        "id": 2,
        "type": "warning",
        "title": "Internet package running out",
        "message": "0.5 GB of 5 GB left",
        "date": "2023-10-18",
        "read": True,
    },
]
