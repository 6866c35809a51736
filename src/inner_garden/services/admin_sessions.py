"""Admin authentication with expiring in-memory bearer tokens."""

import hmac
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum

from inner_garden.domain.errors import AdminNotConfiguredError, AuthError
from inner_garden.domain.sessions import AdminSession
from inner_garden.domain.timestamps import utc_now

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
DEFAULT_SESSION_TTL = timedelta(hours=12)


class AdminAuthMode(StrEnum):
    """How admin login is configured for this deployment."""

    CREDENTIALS = "credentials"
    SHARED_SECRET = "shared_secret"
    DISABLED = "disabled"


@dataclass
class AdminSessionService:
    """Issues and validates admin session tokens.

    Credentials mode checks ``admin_email``/``admin_password``. When only
    ``admin_token`` is configured, login accepts that token as the password.
    The static token is also accepted directly by ``authorize`` and never
    expires.
    """

    admin_email: str | None = None
    admin_password: str | None = None
    admin_token: str | None = None
    ttl: timedelta = DEFAULT_SESSION_TTL
    max_sessions: int = 256
    clock: Callable[[], datetime] = field(default=utc_now)
    _sessions: dict[str, AdminSession] = field(default_factory=dict, repr=False)

    @property
    def mode(self) -> AdminAuthMode:
        """Return the active configuration mode."""
        if self.admin_email and self.admin_password:
            return AdminAuthMode.CREDENTIALS
        if self.admin_token:
            return AdminAuthMode.SHARED_SECRET
        return AdminAuthMode.DISABLED

    def login(self, email: str, password: str) -> AdminSession:
        """Validate credentials and mint a new session token."""
        mode = self.mode
        if mode is AdminAuthMode.DISABLED:
            raise AdminNotConfiguredError
        if mode is AdminAuthMode.CREDENTIALS:
            email_ok = _matches(email.strip().lower(), self.admin_email.strip().lower())
            password_ok = _matches(password, self.admin_password)
            valid = email_ok and password_ok
            session_email = self.admin_email
        else:
            valid = _matches(password, self.admin_token)
            session_email = email.strip() or "admin"
        if not valid:
            logger.warning("Admin login rejected")
            raise AuthError(INVALID_CREDENTIALS)

        now = self.clock()
        self._evict(now)
        session = AdminSession(
            token=secrets.token_urlsafe(32),
            email=session_email,
            expires_at=now + self.ttl,
        )
        self._sessions[session.token] = session
        logger.info("Admin session issued")
        return session

    def authorize(self, token: str | None) -> AdminSession:
        """Return the session for ``token`` or raise ``AuthError``."""
        if not token:
            raise AuthError
        if self.admin_token and _matches(token, self.admin_token):
            return AdminSession(
                token=token, email=self.admin_email or "admin", expires_at=None
            )
        session = self._sessions.get(token)
        if session is None:
            raise AuthError
        if session.is_expired(self.clock()):
            self._sessions.pop(token, None)
            raise AuthError
        return session

    def active_count(self) -> int:
        """Return how many issued tokens are currently held."""
        return len(self._sessions)

    def _evict(self, now: datetime) -> None:
        """Drop expired sessions and make room for one more."""
        for token, session in list(self._sessions.items()):
            if session.is_expired(now):
                del self._sessions[token]
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest = min(
                self._sessions.values(),
                key=lambda item: item.expires_at or now,
            )
            del self._sessions[oldest.token]


def _matches(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
