"""Single-admin login.

Credentials come from settings; a successful login issues an opaque bearer
token that stands in for the client-side "admin" flag until logout.
"""

import hmac
import secrets
import threading

from calendlyx.core.config import settings
from calendlyx.core.errors import AuthenticationError
from calendlyx.core.logging import get_logger

logger = get_logger(__name__)


class AdminSessions:
    def __init__(self) -> None:
        self._tokens: set[str] = set()
        self._lock = threading.Lock()

    def login(self, email: str, password: str) -> str:
        email_ok = hmac.compare_digest(email.strip().lower().encode(), settings.admin_email.lower().encode())
        password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
        if not (email_ok and password_ok):
            logger.warning("admin login rejected email=%r", email)
            raise AuthenticationError("Invalid email or password")

        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens.add(token)
        logger.info("admin login succeeded")
        return token

    def logout(self, token: str) -> None:
        with self._lock:
            self._tokens.discard(token)

    def is_admin(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return token in self._tokens

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()


admin_sessions = AdminSessions()
