import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from database.setup_db import SessionLocal, init_db
from database.models.users import User
from database.models.customers import Customer
from database.models.invoice import Invoice

def clear_all_data(db):
    try:
        # invoices reference customers, so they go first
        db.execute(delete(Invoice))
        db.execute(delete(Customer))
        db.execute(delete(User))
        db.commit()
        print("All invoice, customer and user rows have been cleared.")
    except SQLAlchemyError as e:
        db.rollback()
        print(f"Failed to clear tables: {e}")
        raise

def create_default_customer(db):
    try:
        default_customer = Customer(
            name="Default Customer",
            email="customer@example.com"
        )
        db.add(default_customer)
        db.commit()
        print(f"Default customer created with ID: {default_customer.id}")
        return default_customer.id
    except SQLAlchemyError as e:
        db.rollback()
        print(f"Failed to create default customer: {e}")
        raise

if __name__ == "__main__":
    db = SessionLocal()
    try:
        init_db()
        clear_all_data(db)
        create_default_customer(db)
    finally:
        db.close()
