# backend/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from backend.config import CORS_ALLOWED_ORIGINS
from backend.routers import auth, invoices
from backend.services.auth_actions import RemoteIdentityProvider
from backend.services.view_cache import ViewCache
from database.setup_db import init_db


def create_app(create_tables: bool = True) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_tables:
            init_db()
        yield

    app = FastAPI(title="Invoice Dashboard", lifespan=lifespan)

    app.state.view_cache = ViewCache()
    app.state.identity_provider = RemoteIdentityProvider()

    # CORS setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url}")
        response = await call_next(request)
        logger.info(f"Status code: {response.status_code}")
        return response

    app.include_router(invoices.router, prefix="/dashboard")
    app.include_router(auth.router, prefix="/login")

    return app


app = create_app()
