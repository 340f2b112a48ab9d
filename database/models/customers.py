import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from database.models import Base

class Customer(Base):
    __tablename__ = "customers"

    id        = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name      = Column(String, nullable=False)
    email     = Column(String, unique=True, nullable=False)
    image_url = Column(String)

    invoices = relationship("Invoice", back_populates="customer")
