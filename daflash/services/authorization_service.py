from __future__ import annotations

import logging
from collections.abc import Iterable

import bcrypt

logger = logging.getLogger(__name__)


def is_allowed_admin(email: str | None, allowed_emails: Iterable[str]) -> bool:
    """Whether ``email`` may use the back office.

    An empty allow-list admits any authenticated admin. Matching ignores case.
    """
    if not email:
        return False
    allowed = {entry.strip().lower() for entry in allowed_emails if entry.strip()}
    if not allowed:
        return True
    return email.strip().lower() in allowed


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


class AuthorizationService:
    def __init__(self, allowed_emails: Iterable[str], password_hash: str = "") -> None:
        self.allowed_emails = list(allowed_emails)
        self.password_hash = password_hash

    def is_allowed_admin(self, email: str | None) -> bool:
        result = is_allowed_admin(email, self.allowed_emails)
        logger.debug("email=%s allowed_admin=%s", email, result)
        return result

    def authenticate(self, email: str, password: str) -> bool:
        if not self.password_hash:
            logger.warning("Login attempted but no admin password hash is configured")
            return False
        if not self.is_allowed_admin(email):
            return False
        try:
            return bcrypt.checkpw(password.encode(), self.password_hash.encode())
        except ValueError:
            logger.error("Configured admin password hash is not a valid bcrypt hash")
            return False
