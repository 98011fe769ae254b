"""
Stockroom Backend — API Keys and Password Hashing
===================================================

What:  The per-route static API-key check and the password hashing helpers.
How:   `require_api_key()` builds a FastAPI dependency bound to one header
       name and one settings field; routes attach it through
       `dependencies=[...]`. Passwords go through a passlib CryptContext.

Header contract:
    Each route declares its own header name (e.g. `add-user-header`). The
    value it must carry is read from `settings.<setting_name>` on every
    request, so a patched or reloaded settings object takes effect
    immediately.
"""

import logging
import secrets
from typing import Awaitable, Callable, Optional

from fastapi import Security
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext

from stockroom.config import settings
from stockroom.exceptions import UnauthorizedError
from stockroom.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

# pbkdf2_sha256 is pure Python in passlib and has no password length cap
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def require_api_key(
    header_name: str, setting_name: str
) -> Callable[..., Awaitable[None]]:
    """
    Build a dependency that rejects requests without the expected header value.

    Args:
        header_name:  HTTP header the client must send (case-insensitive)
        setting_name: Attribute of `settings` holding the expected value

    Raises (from the returned dependency):
        UnauthorizedError: header missing, blank, or not equal to the key
    """
    # auto_error=False: the dependency raises our own 401 instead of
    # FastAPI's 403 so the error body matches every other failure
    scheme = APIKeyHeader(name=header_name, scheme_name=header_name, auto_error=False)

    async def verify_api_key(api_key: Optional[str] = Security(scheme)) -> None:
        if not api_key:
            logger.warning("[%s] Missing API key header '%s'", request_id_var.get(""), header_name)
            raise UnauthorizedError(
                message=f"Missing required header '{header_name}'",
                header=header_name,
            )
        expected = getattr(settings, setting_name)
        if not secrets.compare_digest(api_key.encode(), expected.encode()):
            logger.warning("[%s] Invalid API key for header '%s'", request_id_var.get(""), header_name)
            raise UnauthorizedError(
                message=f"Invalid API key in header '{header_name}'",
                header=header_name,
            )

    return verify_api_key
