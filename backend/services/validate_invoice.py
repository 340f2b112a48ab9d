# backend/services/validate_invoice.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

FIELD_MESSAGES = {
    "customer_id": "Please select a customer",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please enter an invoice status",
}

# invoices.amount is a 32-bit INTEGER column of cents
MAX_AMOUNT_CENTS = 2_147_483_647
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100

# form input name -> record field name
FORM_FIELDS = {
    "customerId": "customer_id",
    "amount": "amount",
    "status": "status",
}


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    customer_id: str = Field(..., min_length=1, description="Customer the invoice is billed to")
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, description="Amount in dollars, as typed into the form")
    status: Literal["pending", "paid"] = Field(..., description="Invoice status")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Any:
        # an empty field coerces to 0 and fails the > 0 check
        if value is None:
            return Decimal(0)
        if isinstance(value, str):
            value = value.strip()
            return value or Decimal(0)
        return value

    @field_validator("amount")
    @classmethod
    def check_cents(cls, value: Decimal) -> Decimal:
        # sub-cent amounts round to 0 cents
        try:
            cents = to_minor_units(value)
        except InvalidOperation:
            raise ValueError("amount cannot be represented in cents")
        if cents <= 0 or cents > MAX_AMOUNT_CENTS:
            raise ValueError("amount is out of range once converted to cents")
        return value


class InvoiceRecord(BaseModel):
    customer_id: str
    amount: int = Field(..., description="Amount in minor units (cents)")
    status: Literal["pending", "paid"]


class ValidationSuccess(BaseModel):
    ok: Literal[True] = True
    data: InvoiceRecord


class ValidationFailure(BaseModel):
    ok: Literal[False] = False
    field_errors: Dict[str, List[str]]


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def _collect_field_errors(error: ValidationError) -> Dict[str, List[str]]:
    field_errors: Dict[str, List[str]] = {}
    for detail in error.errors():
        field = str(detail["loc"][0]) if detail["loc"] else ""
        message = FIELD_MESSAGES.get(field)
        if message is None:
            continue
        messages = field_errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return field_errors


def validate_invoice_form(raw: Mapping[str, Any]) -> ValidationResult:
    """Validate raw invoice form fields.

    Collects an error for every failing field rather than stopping at the
    first one. On success the amount is returned in cents.
    """
    values: Dict[str, Optional[Any]] = {
        field: raw.get(form_name) for form_name, field in FORM_FIELDS.items()
    }
    try:
        form = InvoiceForm(**values)
    except ValidationError as e:
        return ValidationFailure(field_errors=_collect_field_errors(e))

    return ValidationSuccess(
        data=InvoiceRecord(
            customer_id=form.customer_id,
            amount=to_minor_units(form.amount),
            status=form.status,
        )
    )
