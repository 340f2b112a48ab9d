# backend/services/invoice_actions.py
from datetime import date
from typing import Dict, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.config import INVOICES_PATH
from backend.services.validate_invoice import ValidationFailure, validate_invoice_form
from backend.services.view_cache import ViewCache
from database.models.invoice import Invoice

CREATE_VALIDATION_MESSAGE = "Missing Fields, failed to create Invoice."
UPDATE_VALIDATION_MESSAGE = "Missing Fields, failed to update Invoice."
CREATE_DATABASE_MESSAGE = "Database error: Failed to Create Invoices."


class ActionState(BaseModel):
    """What the form re-renders with when an action does not navigate away."""
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class Redirect(BaseModel):
    location: str


ActionResult = Union[ActionState, Redirect]


def _revalidate_and_redirect(cache: ViewCache) -> Redirect:
    cache.revalidate_path(INVOICES_PATH)
    return Redirect(location=INVOICES_PATH)


def create_invoice(db: Session, cache: ViewCache, form, today: Optional[date] = None) -> ActionResult:
    validated = validate_invoice_form(form)
    if isinstance(validated, ValidationFailure):
        return ActionState(errors=validated.field_errors, message=CREATE_VALIDATION_MESSAGE)

    record = validated.data
    try:
        db.execute(
            insert(Invoice).values(
                customer_id=record.customer_id,
                amount=record.amount,
                status=record.status,
                date=today or date.today(),
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create invoice")
        return ActionState(message=CREATE_DATABASE_MESSAGE)

    return _revalidate_and_redirect(cache)


def update_invoice(db: Session, cache: ViewCache, invoice_id: str, form) -> ActionResult:
    validated = validate_invoice_form(form)
    if isinstance(validated, ValidationFailure):
        return ActionState(errors=validated.field_errors, message=UPDATE_VALIDATION_MESSAGE)

    record = validated.data
    try:
        result = db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(customer_id=record.customer_id, amount=record.amount, status=record.status)
        )
        db.commit()
        if result.rowcount == 0:
            logger.warning(f"Update matched no invoice with id {invoice_id}")
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to update invoice {invoice_id}")

    # navigates back to the listing even when the write failed
    return _revalidate_and_redirect(cache)


def delete_invoice(db: Session, cache: ViewCache, invoice_id: str) -> Redirect:
    try:
        db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to delete invoice {invoice_id}")

    return _revalidate_and_redirect(cache)
