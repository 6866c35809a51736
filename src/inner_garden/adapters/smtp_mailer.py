"""SMTP mailer adapter."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from inner_garden.domain.notifications import OutgoingEmail
from inner_garden.services.notifications import Mailer


@dataclass
class SmtpMailer(Mailer):
    """Mailer that relays through an SMTP server using STARTTLS."""

    host: str
    port: int
    username: str
    password: str | None
    sender: str
    timeout: float = 15

    async def send(self, email: OutgoingEmail) -> None:
        """Send ``email`` without blocking the event loop."""
        await asyncio.to_thread(self._send_sync, self.build_message(email))

    def build_message(self, email: OutgoingEmail) -> EmailMessage:
        """Build a MIME message with plain-text and HTML parts."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        if email.reply_to:
            message["Reply-To"] = email.reply_to
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(email.html, subtype="html")
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
            client.starttls()
            if self.password:
                client.login(self.username, self.password)
            client.send_message(message)
