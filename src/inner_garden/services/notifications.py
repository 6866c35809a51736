"""Order and consultation notifications delivered by email and webhook."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Protocol
from zoneinfo import ZoneInfo

from inner_garden.domain.errors import IntegrationDisabledError, UpstreamError
from inner_garden.domain.notifications import OutgoingEmail
from inner_garden.domain.timestamps import format_timestamp, utc_now

logger = logging.getLogger(__name__)

STUDIO_NAME = "Inner Garden Art"
STUDIO_TIMEZONE = ZoneInfo("Europe/Kiev")
FRAME_LABELS = {
    "no-frame": "No frame (canvas on stretcher)",
    "wooden-frame": "Wooden frame (+€200)",
    "metal-frame": "Metal frame (+€350)",
}
ORDER_FAILED = "Failed to process order. Please try again."
CONSULTATION_FAILED = "Failed to submit consultation request. Please try again."


class Mailer(Protocol):
    """Interface for sending HTML email."""

    async def send(self, email: OutgoingEmail) -> None:
        """Deliver a single email."""


class WebhookClient(Protocol):
    """Interface for forwarding JSON payloads to a webhook."""

    async def post(self, payload: dict[str, object]) -> None:
        """Send ``payload`` to the configured endpoint."""


@dataclass(frozen=True)
class OrderDetails:
    """Validated order request from the website."""

    artwork: str
    name: str
    email: str
    price: str | None = None
    phone: str | None = None
    country: str | None = None
    frame: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class ConsultationDetails:
    """Validated consultation request from the website."""

    name: str
    email: str | None = None
    phone: str | None = None
    message: str | None = None
    preferred_date: str | None = None
    artwork: str | None = None


@dataclass
class NotificationService:
    """Notifies the studio (and customers) about incoming requests."""

    mailer: Mailer | None
    studio_email: str | None
    webhook_client: WebhookClient | None = None

    async def submit_order(self, order: OrderDetails) -> None:
        """Email the studio and the customer about a new order."""
        studio_email = self._require_mail()
        emails = [
            OutgoingEmail(
                to=studio_email,
                subject=f"New Order: {order.artwork}",
                html=render_studio_order_email(order, utc_now()),
                reply_to=order.email,
            ),
            OutgoingEmail(
                to=order.email,
                subject=f"Thank you for your order - {order.artwork}",
                html=render_customer_order_email(order, studio_email),
            ),
        ]
        try:
            await asyncio.gather(*(self.mailer.send(email) for email in emails))
        except Exception as exc:
            logger.exception("Order notification failed")
            raise UpstreamError(ORDER_FAILED) from exc
        logger.info(
            "Order email sent",
            extra={"artwork": order.artwork, "customer": order.name},
        )

    async def submit_consultation(self, request: ConsultationDetails) -> None:
        """Email the studio and forward the lead to the webhook if configured."""
        studio_email = self._require_mail()
        email = OutgoingEmail(
            to=studio_email,
            subject=f"New consultation request: {request.name}",
            html=render_consultation_email(request, utc_now()),
            reply_to=request.email,
        )
        try:
            await self.mailer.send(email)
            if self.webhook_client is not None:
                await self.webhook_client.post(
                    {
                        "type": "consultation",
                        "name": request.name,
                        "email": request.email,
                        "phone": request.phone,
                        "message": request.message,
                        "preferred_date": request.preferred_date,
                        "artwork": request.artwork,
                        "submitted_at": format_timestamp(utc_now()),
                    }
                )
        except Exception as exc:
            logger.exception("Consultation notification failed")
            raise UpstreamError(CONSULTATION_FAILED) from exc
        logger.info("Consultation request sent", extra={"customer": request.name})

    def _require_mail(self) -> str:
        if self.mailer is None or not self.studio_email:
            raise IntegrationDisabledError("Email delivery is not configured")
        return self.studio_email


def frame_label(frame: str | None) -> str:
    """Return the human label for a frame option."""
    return FRAME_LABELS.get(frame or "no-frame", FRAME_LABELS["no-frame"])


def format_studio_time(moment: datetime) -> str:
    """Render a timestamp in the studio's local time."""
    return moment.astimezone(STUDIO_TIMEZONE).strftime("%d.%m.%Y, %H:%M:%S")


def render_studio_order_email(order: OrderDetails, received_at: datetime) -> str:
    """Render the order notification sent to the studio."""
    rows = [
        _field("Customer Name", escape(order.name)),
        _field(
            "Email",
            f'<a href="mailto:{escape(order.email)}">{escape(order.email)}</a>',
        ),
    ]
    if order.phone:
        rows.append(
            _field(
                "Phone",
                f'<a href="tel:{escape(order.phone)}">{escape(order.phone)}</a>',
            )
        )
    rows.append(_field("Country", escape(order.country or "")))
    rows.append(_field("Frame Option", escape(frame_label(order.frame))))
    if order.message:
        rows.append(_field("Message", escape(order.message)))
    rows.append(_field("Order Time", format_studio_time(received_at)))
    body = (
        f'<div class="price">{escape(order.price or "")}</div>' + "".join(rows)
    )
    return _layout(
        title="New Artwork Order",
        subtitle=escape(order.artwork),
        body=body,
        footer=f"{STUDIO_NAME} • Premium Abstract Art Gallery",
    )


def render_customer_order_email(order: OrderDetails, studio_email: str) -> str:
    """Render the confirmation sent to the customer."""
    artwork = escape(order.artwork)
    body = (
        f'<div class="artwork">{artwork}</div>'
        '<div class="message">'
        f"<p>Dear {escape(order.name)},</p>"
        f"<p>Thank you for your interest in <strong>{artwork}</strong>!</p>"
        "<p>We have received your order request and will contact you within "
        "24 hours to discuss the details, delivery, and payment options.</p>"
        "<p><strong>Your order details:</strong></p>"
        "<ul>"
        f"<li>Artwork: {artwork}</li>"
        f"<li>Price: {escape(order.price or '')}</li>"
        f"<li>Frame: {escape(frame_label(order.frame))}</li>"
        "</ul>"
        "<p>If you have any questions, please don't hesitate to contact us.</p>"
        f"<p>Best regards,<br>{STUDIO_NAME}</p>"
        "</div>"
    )
    contact = escape(studio_email)
    return _layout(
        title="Thank You for Your Order!",
        subtitle=None,
        body=body,
        footer=f'{STUDIO_NAME} • <a href="mailto:{contact}">{contact}</a>',
    )


def render_consultation_email(
    request: ConsultationDetails, received_at: datetime
) -> str:
    """Render the consultation lead sent to the studio."""
    rows = [_field("Name", escape(request.name))]
    if request.email:
        rows.append(_field("Email", escape(request.email)))
    if request.phone:
        rows.append(_field("Phone", escape(request.phone)))
    if request.artwork:
        rows.append(_field("Artwork", escape(request.artwork)))
    if request.preferred_date:
        rows.append(_field("Preferred Date", escape(request.preferred_date)))
    if request.message:
        rows.append(_field("Message", escape(request.message)))
    rows.append(_field("Received", format_studio_time(received_at)))
    return _layout(
        title="New Consultation Request",
        subtitle=None,
        body="".join(rows),
        footer=STUDIO_NAME,
    )


def _field(label: str, value: str) -> str:
    return (
        '<div class="field">'
        f'<div class="label">{label}</div>'
        f'<div class="value">{value}</div>'
        "</div>"
    )


def _layout(title: str, subtitle: str | None, body: str, footer: str) -> str:
    header = f"<h1>{title}</h1>"
    if subtitle:
        header += f"<p>{subtitle}</p>"
    return (
        "<!DOCTYPE html><html><head><style>"
        "body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }"
        ".container { max-width: 600px; margin: 0 auto; padding: 20px; }"
        ".header { background: #667eea; color: white; padding: 30px;"
        " text-align: center; }"
        ".content { background: #f9f9f9; padding: 30px; }"
        ".field { margin: 15px 0; padding: 15px; background: white; }"
        ".label { font-weight: bold; color: #667eea; }"
        ".price, .artwork { font-size: 22px; font-weight: bold; color: #e67e22;"
        " text-align: center; }"
        ".footer { text-align: center; margin-top: 20px; color: #999;"
        " font-size: 12px; }"
        "</style></head><body>"
        '<div class="container">'
        f'<div class="header">{header}</div>'
        f'<div class="content">{body}</div>'
        f'<div class="footer">{footer}</div>'
        "</div></body></html>"
    )
