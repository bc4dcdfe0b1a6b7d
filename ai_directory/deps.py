"""
FastAPI dependencies: the injected store, ranker and settings, and the
authenticated caller.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .ai import Ranker
from .catalog.schemas import User, UserCreate
from .catalog.store import CatalogStore
from .config import Settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_ranker(request: Request) -> Ranker:
    return request.app.state.ranker


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """Resolve the bearer token to a user, creating the record on first sight.

    Tokens are issued by the external identity provider and mapped to
    usernames through ``API_TOKENS``. Missing or unknown tokens get a 401.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    username = settings.API_TOKENS.get(credentials.credentials)
    if username is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    with store.lock:
        user = store.get_user_by_username(username)
        if user is None:
            user = store.create_user(
                UserCreate(username=username, is_admin=username in settings.ADMIN_USERNAMES)
            )
            logger.info("Registered user %s (id=%s)", username, user.id)
    return user
