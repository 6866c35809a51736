"""Domain models for outbound notifications."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutgoingEmail:
    """A rendered HTML email ready to hand to a mailer."""

    to: str
    subject: str
    html: str
    reply_to: str | None = None
