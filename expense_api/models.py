"""SQLAlchemy models for users and expenses."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, BigInteger, Column, Float, String, Text

from .database import Base

PRIVILEGED_ROLES = frozenset({"admin", "manager"})


class User(Base):
    __tablename__ = "users"

    id: str = Column(String(64), primary_key=True)
    name: str = Column(String(120), nullable=False)
    email: str = Column(String(255), nullable=False, unique=True)
    role: str = Column(String(20), nullable=False, default="employee")
    avatar_url: Optional[str] = Column(String(500), nullable=True)


class Expense(Base):
    __tablename__ = "expenses"

    id: str = Column(String(64), primary_key=True)
    user_id: str = Column(String(64), nullable=False, index=True)
    merchant: str = Column(String(255), nullable=False)
    amount: float = Column(Float, nullable=False)
    currency: str = Column(String(10), nullable=False, default="USD")
    date: int = Column(BigInteger, nullable=False, index=True)
    description: str = Column(Text, nullable=False, default="")
    status: str = Column(String(20), nullable=False, default="pending")
    category: str = Column(String(100), nullable=False)
    history: List[Dict[str, Any]] = Column(JSON, nullable=False, default=list)
