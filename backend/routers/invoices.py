# backend/routers/invoices.py
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from backend.config import INVOICES_PATH
from backend.dependencies import get_db, get_view_cache
from backend.services.invoice_actions import (
    CREATE_DATABASE_MESSAGE,
    ActionResult,
    Redirect,
    create_invoice,
    delete_invoice,
    update_invoice,
)
from backend.services.invoice_queries import fetch_customers, fetch_invoice_by_id, fetch_invoices
from backend.services.view_cache import ViewCache

router = APIRouter()


def _to_response(result: ActionResult):
    if isinstance(result, Redirect):
        return RedirectResponse(result.location, status_code=303)
    status_code = 500 if result.message == CREATE_DATABASE_MESSAGE else 422
    return JSONResponse(result.model_dump(), status_code=status_code)


def _invoice_form(customerId: Optional[str], amount: Optional[str], status: Optional[str]) -> dict:
    return {"customerId": customerId, "amount": amount, "status": status}


@router.get("/invoices")
def list_invoices(db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    invoices = cache.get_or_render(INVOICES_PATH, lambda: fetch_invoices(db))
    return {"invoices": invoices}


@router.get("/customers")
def list_customers(db: Session = Depends(get_db)):
    return {"customers": fetch_customers(db)}


@router.post("/invoices/create")
def create(
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
):
    return _to_response(create_invoice(db, cache, _invoice_form(customerId, amount, status)))


@router.get("/invoices/{invoice_id}")
def get_invoice(invoice_id: str, db: Session = Depends(get_db)):
    invoice = fetch_invoice_by_id(db, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.post("/invoices/{invoice_id}/edit")
def edit(
    invoice_id: str,
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
):
    return _to_response(update_invoice(db, cache, invoice_id, _invoice_form(customerId, amount, status)))


@router.post("/invoices/{invoice_id}/delete")
def delete(invoice_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)):
    return _to_response(delete_invoice(db, cache, invoice_id))
