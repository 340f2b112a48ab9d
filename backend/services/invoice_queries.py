# backend/services/invoice_queries.py
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models.customers import Customer
from database.models.invoice import Invoice


class InvoiceRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: Optional[str] = None
    amount: int = Field(..., description="Amount in cents")
    status: str
    date: str = Field(..., description="ISO 8601 date (YYYY-MM-DD)")


class InvoiceEditForm(BaseModel):
    id: str
    customer_id: str
    amount: float = Field(..., description="Amount in dollars, as shown in the edit form")
    status: str


class CustomerOption(BaseModel):
    id: str
    name: str


def fetch_invoices(db: Session) -> List[Dict]:
    rows = db.execute(
        select(
            Invoice.id,
            Invoice.customer_id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            Invoice.amount,
            Invoice.status,
            Invoice.date,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
    ).all()

    return [
        InvoiceRow(
            id=row.id,
            customer_id=row.customer_id,
            name=row.name,
            email=row.email,
            image_url=row.image_url,
            amount=row.amount,
            status=row.status,
            date=row.date.isoformat(),
        ).model_dump()
        for row in rows
    ]


def fetch_invoice_by_id(db: Session, invoice_id: str) -> Optional[InvoiceEditForm]:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        return None
    return InvoiceEditForm(
        id=invoice.id,
        customer_id=invoice.customer_id,
        amount=invoice.amount / 100,
        status=invoice.status,
    )


def fetch_customers(db: Session) -> List[CustomerOption]:
    customers = db.execute(select(Customer.id, Customer.name).order_by(Customer.name)).all()
    return [CustomerOption(id=c.id, name=c.name) for c in customers]
