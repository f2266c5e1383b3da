# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Minimal user registry:
# - User: stored record (password kept verbatim, no hashing)
# - LoginRequest: credentials sent to POST /login
#
# Usernames are not required to be unique.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from .task import MAX_RECORD_ID


class User(BaseModel):
    """
    A registered user.

    Note: the password is stored and compared as plain text. There is no
    hashing and no session token; login is a one-shot credential check.
    """

    id: int = Field(
        ...,
        ge=0,
        le=MAX_RECORD_ID,
        description="Unsigned user identifier (primary key)"
    )

    username: str = Field(
        ...,
        description="Login name (uniqueness not enforced)"
    )

    password: str = Field(
        ...,
        description="Plain-text password"
    )

    model_config = ConfigDict(strict=True)


class LoginRequest(BaseModel):
    """
    Credentials for POST /login.

    Clients usually send a whole User object; the id is accepted but
    only username and password take part in the check.
    """

    id: int | None = Field(
        default=None,
        description="Ignored; accepted so a full User body decodes"
    )
    username: str
    password: str

    model_config = ConfigDict(strict=True)
