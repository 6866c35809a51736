"""Tests for container wiring."""

import asyncio

from inner_garden.config import Settings
from inner_garden.containers import build_container


def test_build_container_wires_configured_integrations(settings) -> None:
    container = build_container(settings)

    assert container.notification_service.mailer is not None
    assert container.notification_service.webhook_client is not None
    assert container.checkout_service.client is not None
    assert container.visualization_service.client is not None
    asyncio.run(container.close_resources())


def test_build_container_without_integrations(tmp_path) -> None:
    container = build_container(Settings(artworks_path=tmp_path / "a.json"))

    assert container.notification_service.mailer is None
    assert container.checkout_service.client is None
    assert container.visualization_service.client is None
    asyncio.run(container.close_resources())
