"""Keyed entity store for users and expenses.

Each record kind is accessed through an :class:`Entity` subclass. Class
methods act on the whole kind (``list``, ``create``, ``ensure_seed``) while an
instance is bound to a single id (``exists``, ``get_state``).
"""
from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.dml import Insert

from . import models, schemas, seed
from .logging import get_stream_logger

LOG = get_stream_logger(__name__)

EXPENSE_ID_PREFIX = "exp-"

ModelT = TypeVar("ModelT")


class EntityNotFoundError(RuntimeError):
    """Raised when an entity cannot be located in the store."""


class EntityStoreError(RuntimeError):
    """Raised when the store fails to persist an entity."""


@dataclass
class Page(Generic[ModelT]):
    items: List[ModelT]
    next: Optional[str] = None


class Entity(Generic[ModelT]):
    model: ClassVar[Type[Any]]
    entity_name: ClassVar[str]
    seed_data: ClassVar[Sequence[Mapping[str, Any]]] = ()

    def __init__(self, session: Session, entity_id: str) -> None:
        self.session = session
        self.id = entity_id

    @classmethod
    def ordering(cls) -> Tuple[Any, ...]:
        return (cls.model.id,)

    def exists(self) -> bool:
        return self.session.get(self.model, self.id) is not None

    def get_state(self) -> ModelT:
        state = self.session.get(self.model, self.id)
        if state is None:
            raise EntityNotFoundError(f"{self.entity_name} {self.id} not found")
        return state

    @classmethod
    def list(cls, session: Session, **filters: Any) -> Page[ModelT]:
        stmt = select(cls.model).filter_by(**filters).order_by(*cls.ordering())
        return Page(items=list(session.scalars(stmt)))

    @classmethod
    def count(cls, session: Session) -> int:
        return session.scalar(select(func.count()).select_from(cls.model)) or 0

    @classmethod
    def create(cls, session: Session, state: Mapping[str, Any]) -> ModelT:
        record = cls.model(**dict(state))
        session.add(record)
        try:
            session.flush()
        except SQLAlchemyError as exc:
            session.rollback()
            raise EntityStoreError(f"Could not persist {cls.entity_name} {state.get('id')}") from exc
        session.refresh(record)
        return record

    @classmethod
    def _insert_ignoring_conflicts(cls, session: Session) -> Optional[Insert]:
        dialect = session.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite.insert(cls.model.__table__).on_conflict_do_nothing()
        if dialect == "postgresql":
            return postgresql.insert(cls.model.__table__).on_conflict_do_nothing()
        return None

    @classmethod
    def ensure_seed(cls, session: Session) -> int:
        """Insert the seed records when the kind is still empty.

        Concurrent first requests may race past the empty check; rows another
        session already inserted are skipped instead of failing the request.
        Returns the number of records this call inserted.
        """
        if cls.count(session):
            return 0
        stmt = cls._insert_ignoring_conflicts(session)
        if stmt is None:
            try:
                with session.begin_nested():
                    session.add_all(cls.model(**copy.deepcopy(dict(row))) for row in cls.seed_data)
            except IntegrityError:
                LOG.debug("%s seed already present", cls.entity_name)
                return 0
            inserted = len(cls.seed_data)
        else:
            inserted = sum(session.execute(stmt.values(**row)).rowcount for row in cls.seed_data)
        if inserted:
            LOG.info("Seeded %d %s records", inserted, cls.entity_name.lower())
        return inserted


class UserEntity(Entity[models.User]):
    model = models.User
    entity_name = "User"
    seed_data = seed.SEED_USERS


class ExpenseEntity(Entity[models.Expense]):
    model = models.Expense
    entity_name = "Expense"
    seed_data = seed.SEED_EXPENSES

    @classmethod
    def ordering(cls) -> Tuple[Any, ...]:
        return (models.Expense.date.desc(), models.Expense.id)

    @staticmethod
    def new_state(payload: schemas.ExpenseCreate) -> Dict[str, Any]:
        """Build the stored state for a freshly submitted expense."""
        return {
            "id": f"{EXPENSE_ID_PREFIX}{uuid.uuid4()}",
            "user_id": payload.user_id,
            "merchant": payload.merchant,
            "amount": payload.amount,
            "currency": payload.currency or schemas.DEFAULT_CURRENCY,
            "date": payload.date,
            "description": payload.description or "",
            "status": "pending",
            "category": payload.category,
            "history": [],
        }


__all__ = [
    "EXPENSE_ID_PREFIX",
    "Entity",
    "EntityNotFoundError",
    "EntityStoreError",
    "ExpenseEntity",
    "Page",
    "UserEntity",
]
