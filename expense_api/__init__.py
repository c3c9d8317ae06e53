"""Expense tracking REST API with role-based visibility and demo seeding."""

from __future__ import annotations

__all__ = [
    "__version__",
    "database",
    "entities",
    "errors",
    "models",
    "routes",
    "schemas",
    "seed",
    "server",
    "settings",
]

__version__ = "1.0.0"
