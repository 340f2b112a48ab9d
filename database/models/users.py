import uuid

from sqlalchemy import Column, String
from database.models import Base

class User(Base):
    __tablename__ = "users"

    id       = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name     = Column(String, nullable=False)
    email    = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)  # hashed by the identity provider
