# =============================================================================
# app/routers/users.py - Registration & Login Endpoints
# =============================================================================
# A minimal user registry:
#
#   POST /register -> insert_user
#   POST /login    -> get_user_by_username + plain-text password compare
#
# No token or session is issued; login is a stateless credential check.
# =============================================================================

import logging

from fastapi import APIRouter, Response
from pydantic import BaseModel

from app.dependencies import StoreGuardDep
from app.exceptions import InvalidCredentialsError
from core.models import LoginRequest, User

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class LoginResponse(BaseModel):
    """Body returned on a successful login."""
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register")
def register_user(user: User, guard: StoreGuardDep):
    """
    Register (or overwrite) a user.

    Answers 200 with an empty body. Usernames are not checked for
    duplicates.
    """
    result = guard.mutate(lambda store: store.insert_user(user))

    response = Response(status_code=200)
    response.headers["X-Persisted"] = "true" if result.persisted else "false"

    logger.info(f"Registered user {user.id}")
    return response


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, guard: StoreGuardDep):
    """
    Check a username/password pair.

    Raises:
        400: If the username is unknown or the password does not match
    """
    stored = guard.read(lambda store: store.get_user_by_username(credentials.username))

    if stored is None or stored.password != credentials.password:
        logger.info(f"Failed login for username {credentials.username!r}")
        raise InvalidCredentialsError()

    return LoginResponse(message="Login success")
