"""Tests for notification rendering and delivery."""

import asyncio
from datetime import UTC, datetime

import pytest

from inner_garden.domain.errors import IntegrationDisabledError
from inner_garden.services.notifications import (
    ConsultationDetails,
    NotificationService,
    OrderDetails,
    frame_label,
    render_customer_order_email,
    render_studio_order_email,
)


def test_studio_email_escapes_user_input() -> None:
    order = OrderDetails(
        artwork="Dawn",
        name="<script>alert(1)</script>",
        email="olena@example.com",
        frame="metal-frame",
    )

    html = render_studio_order_email(order, datetime(2026, 3, 1, 9, 0, tzinfo=UTC))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Metal frame (+€350)" in html
    assert "01.03.2026, 11:00:00" in html


def test_customer_email_mentions_artwork_and_frame() -> None:
    order = OrderDetails(artwork="Dawn", name="Olena", email="olena@example.com")

    html = render_customer_order_email(order, "studio@example.com")

    assert "Dear Olena" in html
    assert "No frame (canvas on stretcher)" in html


def test_frame_label_defaults_to_no_frame() -> None:
    assert frame_label(None) == "No frame (canvas on stretcher)"
    assert frame_label("unknown") == "No frame (canvas on stretcher)"
    assert frame_label("wooden-frame") == "Wooden frame (+€200)"


def test_order_subjects(mailer) -> None:
    service = NotificationService(mailer=mailer, studio_email="studio@example.com")

    asyncio.run(
        service.submit_order(
            OrderDetails(artwork="Dawn", name="Olena", email="olena@example.com")
        )
    )

    subjects = {email.to: email.subject for email in mailer.sent}
    assert subjects == {
        "studio@example.com": "New Order: Dawn",
        "olena@example.com": "Thank you for your order - Dawn",
    }


def test_consultation_without_webhook_only_emails(mailer) -> None:
    service = NotificationService(mailer=mailer, studio_email="studio@example.com")

    asyncio.run(
        service.submit_consultation(
            ConsultationDetails(name="Iryna", email="iryna@example.com")
        )
    )

    assert mailer.sent[0].reply_to == "iryna@example.com"


def test_unconfigured_mail_is_disabled() -> None:
    service = NotificationService(mailer=None, studio_email=None)

    with pytest.raises(IntegrationDisabledError):
        asyncio.run(
            service.submit_order(
                OrderDetails(artwork="Dawn", name="Olena", email="olena@example.com")
            )
        )
