import uuid

from sqlalchemy import Column, Integer, String, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database.models import Base

INVOICE_STATUSES = ("pending", "paid")

class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
    )

    id          = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False)
    amount      = Column(Integer, nullable=False)  # minor units (cents)
    status      = Column(String, nullable=False)
    date        = Column(Date, nullable=False)

    customer = relationship("Customer", back_populates="invoices")
