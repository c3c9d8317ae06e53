"""Route registration for the ``/api`` surface."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import database, schemas
from .entities import EntityStoreError, ExpenseEntity, UserEntity
from .errors import InternalServerError, bad, not_found, ok
from .logging import get_stream_logger
from .models import PRIVILEGED_ROLES
from .settings import get_settings

LOG = get_stream_logger(__name__)


def ensure_seed_data(db: Session = Depends(database.get_db)) -> None:
    """Make sure demo users and expenses exist before any ``/api`` handler runs."""
    if not get_settings().seed_demo_data:
        return
    UserEntity.ensure_seed(db)
    ExpenseEntity.ensure_seed(db)


router = APIRouter(prefix="/api", dependencies=[Depends(ensure_seed_data)])


@router.get("/health", response_model=schemas.ApiResponse[schemas.HealthStatus], tags=["system"])
def api_health() -> schemas.ApiResponse[schemas.HealthStatus]:
    now = datetime.now(tz=timezone.utc).isoformat()
    return ok(schemas.HealthStatus(status="ok", timestamp=now))


@router.get("/users", response_model=schemas.ApiResponse[List[schemas.UserRead]], tags=["users"])
def list_users(db: Session = Depends(database.get_db)) -> schemas.ApiResponse[List[schemas.UserRead]]:
    page = UserEntity.list(db)
    return ok([schemas.UserRead.model_validate(user) for user in page.items])


@router.get("/users/{user_id}", response_model=schemas.ApiResponse[schemas.UserRead], tags=["users"])
def get_user(user_id: str, db: Session = Depends(database.get_db)) -> schemas.ApiResponse[schemas.UserRead]:
    user_entity = UserEntity(db, user_id)
    if not user_entity.exists():
        raise not_found("User not found")
    return ok(schemas.UserRead.model_validate(user_entity.get_state()))


@router.get("/expenses", response_model=schemas.ApiResponse[List[schemas.ExpenseRead]], tags=["expenses"])
def list_expenses(
    user_id: Optional[str] = Query(None, alias="userId"),
    role: Optional[str] = Query(None),
    db: Session = Depends(database.get_db),
) -> schemas.ApiResponse[List[schemas.ExpenseRead]]:
    if role in PRIVILEGED_ROLES:
        # Admins and managers see every expense.
        page = ExpenseEntity.list(db)
    elif user_id:
        page = ExpenseEntity.list(db, user_id=user_id)
    else:
        raise bad("A userId or admin/manager role is required to fetch expenses.")
    return ok([schemas.ExpenseRead.model_validate(expense) for expense in page.items])


@router.get("/expenses/{expense_id}", response_model=schemas.ApiResponse[schemas.ExpenseRead], tags=["expenses"])
def get_expense(expense_id: str, db: Session = Depends(database.get_db)) -> schemas.ApiResponse[schemas.ExpenseRead]:
    expense_entity = ExpenseEntity(db, expense_id)
    if not expense_entity.exists():
        raise not_found("Expense not found")
    return ok(schemas.ExpenseRead.model_validate(expense_entity.get_state()))


@router.post("/expenses", response_model=schemas.ApiResponse[schemas.ExpenseRead], tags=["expenses"])
def create_expense(
    expense_in: schemas.ExpenseCreate,
    db: Session = Depends(database.get_db),
) -> schemas.ApiResponse[schemas.ExpenseRead]:
    missing = expense_in.missing_fields()
    if missing:
        LOG.debug("Rejected expense without %s", ", ".join(missing))
        raise bad("Missing required expense fields.")
    state = ExpenseEntity.new_state(expense_in)
    try:
        created = ExpenseEntity.create(db, state)
    except EntityStoreError as exc:
        LOG.exception("Failed to create expense: %s", exc)
        raise InternalServerError("Failed to create expense") from exc
    LOG.info("Created expense %s for user %s", created.id, created.user_id)
    return ok(schemas.ExpenseRead.model_validate(created))


__all__ = ["ensure_seed_data", "router"]
