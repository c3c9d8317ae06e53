"""Demo users and expenses inserted on first access."""
from __future__ import annotations

from typing import Any, Dict, List

DAY_MS = 24 * 60 * 60 * 1000
# 2024-06-03T09:00:00Z, a fixed anchor keeps the demo data deterministic.
_ANCHOR_MS = 1_717_405_200_000

SEED_USERS: List[Dict[str, Any]] = [
    {
        "id": "u-admin",
        "name": "Alex Rivera",
        "email": "alex.rivera@example.com",
        "role": "admin",
        "avatar_url": "https://i.pravatar.cc/150?u=u-admin",
    },
    {
        "id": "u-manager",
        "name": "Morgan Lee",
        "email": "morgan.lee@example.com",
        "role": "manager",
        "avatar_url": "https://i.pravatar.cc/150?u=u-manager",
    },
    {
        "id": "u-employee-1",
        "name": "Sam Carter",
        "email": "sam.carter@example.com",
        "role": "employee",
        "avatar_url": "https://i.pravatar.cc/150?u=u-employee-1",
    },
    {
        "id": "u-employee-2",
        "name": "Jordan Patel",
        "email": "jordan.patel@example.com",
        "role": "employee",
        "avatar_url": "https://i.pravatar.cc/150?u=u-employee-2",
    },
]


def _history(*entries: tuple) -> List[Dict[str, Any]]:
    history = []
    for status, timestamp, actor_id, comment in entries:
        entry = {"status": status, "timestamp": timestamp, "actor_id": actor_id}
        if comment is not None:
            entry["comment"] = comment
        history.append(entry)
    return history


SEED_EXPENSES: List[Dict[str, Any]] = [
    {
        "id": "exp-seed-001",
        "user_id": "u-employee-1",
        "merchant": "Blue Bottle Coffee",
        "amount": 18.5,
        "currency": "USD",
        "date": _ANCHOR_MS - 1 * DAY_MS,
        "description": "Coffee with client",
        "status": "pending",
        "category": "Meals",
        "history": [],
    },
    {
        "id": "exp-seed-002",
        "user_id": "u-employee-1",
        "merchant": "Delta Air Lines",
        "amount": 482.0,
        "currency": "USD",
        "date": _ANCHOR_MS - 9 * DAY_MS,
        "description": "Flight to the Denver offsite",
        "status": "approved",
        "category": "Travel",
        "history": _history(
            ("approved", _ANCHOR_MS - 7 * DAY_MS, "u-manager", "Budgeted trip"),
        ),
    },
    {
        "id": "exp-seed-003",
        "user_id": "u-employee-2",
        "merchant": "Staples",
        "amount": 64.23,
        "currency": "USD",
        "date": _ANCHOR_MS - 3 * DAY_MS,
        "description": "Printer toner",
        "status": "rejected",
        "category": "Office Supplies",
        "history": _history(
            ("rejected", _ANCHOR_MS - 2 * DAY_MS, "u-manager", "Order through procurement"),
        ),
    },
    {
        "id": "exp-seed-004",
        "user_id": "u-employee-2",
        "merchant": "Hotel Adlon",
        "amount": 310.0,
        "currency": "EUR",
        "date": _ANCHOR_MS - 14 * DAY_MS,
        "description": "Conference accommodation",
        "status": "reimbursed",
        "category": "Lodging",
        "history": _history(
            ("approved", _ANCHOR_MS - 12 * DAY_MS, "u-manager", None),
            ("reimbursed", _ANCHOR_MS - 10 * DAY_MS, "u-admin", "Paid in June payroll"),
        ),
    },
    {
        "id": "exp-seed-005",
        "user_id": "u-manager",
        "merchant": "Uber",
        "amount": 27.8,
        "currency": "USD",
        "date": _ANCHOR_MS - 5 * DAY_MS,
        "description": "",
        "status": "pending",
        "category": "Transport",
        "history": [],
    },
]

__all__ = ["SEED_EXPENSES", "SEED_USERS"]
