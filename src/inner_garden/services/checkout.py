"""Hosted checkout sessions for available artworks."""

import logging
from dataclasses import dataclass
from typing import Protocol

from inner_garden.domain.artworks import Artwork
from inner_garden.domain.errors import (
    IntegrationDisabledError,
    UpstreamError,
    ValidationError,
)
from inner_garden.domain.checkout import CheckoutSession
from inner_garden.services.artworks import ArtworkService

logger = logging.getLogger(__name__)

FRAME_SURCHARGES = {"wooden-frame": 200, "metal-frame": 350}
FRAME_NAMES = {"wooden-frame": "Wooden frame", "metal-frame": "Metal frame"}


@dataclass(frozen=True)
class LineItem:
    """One priced line on a checkout page."""

    name: str
    unit_amount: int
    currency: str
    quantity: int = 1


class PaymentClient(Protocol):
    """Interface for a hosted payment page provider."""

    async def create_checkout_session(
        self,
        *,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        """Create a checkout session and return its id and URL."""


@dataclass
class CheckoutService:
    """Builds checkout sessions from catalogue prices."""

    artwork_service: ArtworkService
    client: PaymentClient | None
    success_url: str
    cancel_url: str

    async def create_session(
        self, artwork_id: str, frame: str | None = None
    ) -> CheckoutSession:
        """Create a payment session for an available artwork."""
        if self.client is None:
            raise IntegrationDisabledError("Online payments are not configured")
        artwork = self.artwork_service.get(artwork_id)
        line_items = build_line_items(artwork, frame)
        try:
            session = await self.client.create_checkout_session(
                line_items=line_items,
                success_url=self.success_url,
                cancel_url=self.cancel_url,
                metadata={"artwork_id": artwork.id, "frame": frame or "no-frame"},
            )
        except Exception as exc:
            logger.exception(
                "Checkout session creation failed", extra={"artwork_id": artwork.id}
            )
            raise UpstreamError("Failed to start checkout. Please try again.") from exc
        logger.info("Checkout session created", extra={"artwork_id": artwork.id})
        return session


def build_line_items(artwork: Artwork, frame: str | None) -> list[LineItem]:
    """Price an artwork (plus optional frame) in minor currency units."""
    if artwork.status != "available":
        raise ValidationError("Artwork is not available for purchase")
    if not isinstance(artwork.price, int | float) or artwork.price <= 0:
        raise ValidationError("Artwork has no price")
    if frame not in (None, "", "no-frame", *FRAME_SURCHARGES):
        raise ValidationError("Unknown frame option")
    currency = str(artwork.currency or "EUR").lower()
    items = [
        LineItem(
            name=artwork.display_title(),
            unit_amount=round(artwork.price * 100),
            currency=currency,
        )
    ]
    if frame in FRAME_SURCHARGES:
        items.append(
            LineItem(
                name=FRAME_NAMES[frame],
                unit_amount=FRAME_SURCHARGES[frame] * 100,
                currency=currency,
            )
        )
    return items
