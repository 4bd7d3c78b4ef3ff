"""
Security helpers for password hashing and HTTP Basic authentication.

Passwords are hashed with PBKDF2‑HMAC (SHA‑256) and a random
per‑password salt; the stored form is ``salthex$hashhex``.  Callers
authenticate with HTTP Basic credentials checked against the
``users`` table.  The resolved identity is returned as a plain dict
(``sub``, ``user_id`` and ``role``) and the username in ``sub`` is
what the card service uses as the owner of a card.

Role checks are applied as FastAPI dependencies through
``require_roles`` so that unauthorised callers are rejected with
HTTP 403 before any service code runs.
"""

import hashlib
import hmac
import logging
import os
from typing import Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .db import get_connection

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000

security = HTTPBasic(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash in hex separated by
    ``$`` so the password can be verified later.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``salt$hash`` string.

    Malformed stored values never match.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


def authenticate_user(username: str, password: str) -> Optional[Dict[str, object]]:
    """Return the identity of a user whose credentials match, else ``None``.

    Disabled accounts never authenticate.
    """
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT id, username, password, role, disabled FROM users WHERE username = ?",
            (username,),
        ).fetchone()
    finally:
        conn.close()
    if not row or row["disabled"]:
        return None
    if not verify_password(password, row["password"]):
        return None
    return {"sub": row["username"], "user_id": row["id"], "role": row["role"]}


def get_current_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
) -> Dict[str, object]:
    """Dependency that retrieves the current authenticated user.

    Raises HTTP 401 with a ``WWW-Authenticate: Basic`` challenge when
    the request carries no credentials or they do not match an active
    account.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    user = authenticate_user(credentials.username, credentials.password)
    if user is None:
        logger.warning("Rejected credentials for %s", credentials.username)
        raise _unauthorized("Invalid username or password")
    return user


# ---------------------------------------------------------------------------
# Role-based access control (RBAC) helpers
# ---------------------------------------------------------------------------

def require_roles(*roles: str) -> Callable[..., Dict[str, object]]:
    """Dependency factory to enforce that the current user has one of ``roles``.

    Use this in FastAPI endpoints via ``Depends(require_roles("CARD-OWNER"))``.
    Authenticated users holding none of the given roles get HTTP 403.
    """

    def _role_dependency(
        current_user: Dict[str, object] = Depends(get_current_user),
    ) -> Dict[str, object]:
        if current_user.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _role_dependency
