"""Domain models for admin sessions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminSession:
    """An issued admin bearer token.

    ``expires_at`` is ``None`` for the statically configured admin token,
    which never expires.
    """

    token: str
    email: str
    expires_at: datetime | None

    def is_expired(self, now: datetime) -> bool:
        """Return true once the session is past its expiry instant."""
        return self.expires_at is not None and self.expires_at < now
