# backend/dependencies.py
from fastapi import Request

from backend.services.auth_actions import RemoteIdentityProvider
from backend.services.view_cache import ViewCache
from database.setup_db import get_db

__all__ = ["get_db", "get_view_cache", "get_identity_provider"]


def get_view_cache(request: Request) -> ViewCache:
    return request.app.state.view_cache


def get_identity_provider(request: Request) -> RemoteIdentityProvider:
    return request.app.state.identity_provider
