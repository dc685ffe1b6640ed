"""Session cookies and password checks for the admin web UI."""

from __future__ import annotations

import base64
import binascii
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from cryptography.exceptions import InvalidKey, UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.argon2 import Argon2id

SessionStore = dict[str, datetime]

_MAX_TTL_DAYS = 365 * 10


@dataclass
class LoginForm:
    """Credentials submitted on the login page."""

    username: str
    password: str


def new_session_store() -> SessionStore:
    """Return an empty token-to-creation-time store."""
    return {}


def extract_session_token(cookie_header: str | None) -> str | None:
    """Return the value of the ``session`` cookie from a Cookie header."""
    if cookie_header is None:
        return None
    for part in cookie_header.split(";"):
        part = part.strip()
        if part.startswith("session="):
            return part[len("session="):]
    return None


def is_authenticated(cookie_header: str | None, store: SessionStore, ttl_days: int) -> bool:
    """Return True if the session cookie names a live session.

    Expired sessions are removed from ``store``.
    """
    if ttl_days <= 0:
        raise ValueError("ttl_days must be positive")
    token = extract_session_token(cookie_header)
    if token is None:
        return False
    created = store.get(token)
    if created is None:
        return False
    age = datetime.now(timezone.utc) - created
    ttl = timedelta(days=min(ttl_days, _MAX_TTL_DAYS * 100))
    if age < ttl:
        return True
    store.pop(token, None)
    return False


def _b64decode(text: str) -> bytes:
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


def verify_password(stored_hash: str, password: str) -> bool:
    """Check ``password`` against an Argon2id hash in PHC string format."""
    parts = stored_hash.split("$")
    if len(parts) != 6 or parts[0] != "" or parts[1] != "argon2id" or parts[2] != "v=19":
        return False
    try:
        params = dict(item.split("=", 1) for item in parts[3].split(","))
        memory_cost = int(params["m"])
        iterations = int(params["t"])
        lanes = int(params["p"])
        salt = _b64decode(parts[4])
        expected = _b64decode(parts[5])
        kdf = Argon2id(
            salt=salt,
            length=len(expected),
            iterations=iterations,
            lanes=lanes,
            memory_cost=memory_cost,
        )
        kdf.verify(password.encode("utf-8"), expected)
    except (InvalidKey, UnsupportedAlgorithm, ValueError, KeyError, TypeError, binascii.Error):
        return False
    return True


def generate_session_token() -> str:
    """Return 32 random bytes as 64 lowercase hex characters."""
    return secrets.token_hex(32)