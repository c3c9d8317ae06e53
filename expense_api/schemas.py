"""Pydantic schemas for serialising users and expenses.

JSON bodies use camelCase keys (``userId``, ``avatarUrl``) while Python code
works with snake_case attributes.
"""
from __future__ import annotations

from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

REQUIRED_EXPENSE_FIELDS = ("user_id", "merchant", "amount", "date", "category")
DEFAULT_CURRENCY = "USD"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserRead(ORMModel):
    id: str
    name: str
    email: str
    role: Literal["admin", "manager", "employee"]
    avatar_url: Optional[str] = None


class ExpenseHistoryEntry(CamelModel):
    status: str
    timestamp: int
    actor_id: str
    comment: Optional[str] = None

    @model_serializer(mode="wrap")
    def omit_missing_comment(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if self.comment is None:
            data.pop("comment", None)
        return data


class ExpenseCreate(CamelModel):
    """Incoming expense payload.

    Every field is optional at the schema level: a missing or empty required
    field is reported as a bad request by :meth:`missing_fields` rather than
    rejected by pydantic.
    """

    user_id: Optional[str] = None
    merchant: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    date: Optional[int] = None
    description: Optional[str] = None
    category: Optional[str] = None

    def missing_fields(self) -> List[str]:
        # Zero and empty strings count as missing.
        return [to_camel(name) for name in REQUIRED_EXPENSE_FIELDS if not getattr(self, name)]


class ExpenseRead(ORMModel):
    id: str
    user_id: str
    merchant: str
    amount: float
    currency: str = DEFAULT_CURRENCY
    date: int
    description: str = ""
    status: str = "pending"
    category: str
    history: List[ExpenseHistoryEntry] = Field(default_factory=list)


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthStatus(BaseModel):
    status: str
    timestamp: str
