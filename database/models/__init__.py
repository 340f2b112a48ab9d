from sqlalchemy.orm import declarative_base
Base = declarative_base()

from database.models.users import User
from database.models.customers import Customer
from database.models.invoice import Invoice
