# backend/routers/auth.py
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from backend.dependencies import get_identity_provider
from backend.services.auth_actions import (
    AuthOutcome,
    IdentityProvider,
    SignedIn,
    authenticate,
    raise_unhandled,
    sign_in_with_github,
    sign_in_with_google,
)

router = APIRouter()


def _to_response(outcome: AuthOutcome):
    outcome = raise_unhandled(outcome)
    if isinstance(outcome, SignedIn):
        return RedirectResponse(outcome.redirect_to, status_code=303)
    if outcome.message is None:
        return Response(status_code=204)
    return JSONResponse({"message": outcome.message}, status_code=401)


@router.post("")
async def login(request: Request, identity: IdentityProvider = Depends(get_identity_provider)):
    form = await request.form()
    return _to_response(authenticate(identity, form))


@router.post("/github")
async def login_github(request: Request, identity: IdentityProvider = Depends(get_identity_provider)):
    form = await request.form()
    return _to_response(sign_in_with_github(identity, form))


@router.post("/google")
async def login_google(request: Request, identity: IdentityProvider = Depends(get_identity_provider)):
    form = await request.form()
    return _to_response(sign_in_with_google(identity, form))
