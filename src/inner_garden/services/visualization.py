"""Room visualization placement suggestions using LLM vision."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from inner_garden.domain.artworks import Artwork
from inner_garden.domain.errors import (
    IntegrationDisabledError,
    UpstreamError,
    ValidationError,
)
from inner_garden.domain.visualization import PlacementSuggestion

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024

PLACEMENT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "wall_detected": {"type": "boolean"},
        "x": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "y": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "width": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["wall_detected", "x", "y", "width", "notes"],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class VisualizationService:
    """Asks a vision model where an artwork would hang in a room photo."""

    client: VisionClient | None
    model: str
    store: bool

    async def suggest_placement(
        self, image: str, artwork: Artwork
    ) -> PlacementSuggestion:
        """Return a placement suggestion for ``artwork`` on the photographed wall."""
        if self.client is None:
            raise IntegrationDisabledError("Room visualization is not configured")
        data_url = to_image_data_url(image)
        try:
            raw = await self.client.extract(
                model=self.model,
                store=self.store,
                image_data_url=data_url,
                schema=PLACEMENT_SCHEMA,
                prompt=_build_prompt(artwork),
            )
            return PlacementSuggestion.model_validate(raw)
        except Exception as exc:
            logger.exception(
                "Room visualization failed", extra={"artwork_id": artwork.id}
            )
            raise UpstreamError("Visualization failed. Please try again.") from exc


def to_image_data_url(image: str) -> str:
    """Accept a data URL or raw base64 and return a data URL."""
    cleaned = image.strip()
    if cleaned.startswith("data:image/"):
        header, _, payload = cleaned.partition(",")
        if not header.endswith(";base64"):
            raise ValidationError("Image data URL must be base64 encoded")
        _decode_image(payload)
        return cleaned
    return _to_data_url(_decode_image(cleaned))


def _decode_image(encoded: str) -> bytes:
    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Image must be a data URL or base64 string") from exc
    if not image_bytes:
        raise ValidationError("Image is empty")
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise ValidationError("Image is too large")
    return image_bytes


def _build_prompt(artwork: Artwork) -> str:
    size = artwork.size or "unknown size"
    return (
        "This is a photo of a room. Find the most suitable wall area to hang "
        f'the painting "{artwork.display_title()}" ({size}). '
        "Return whether a wall is visible, the centre of the placement as x/y "
        "fractions of the photo, the painting width as a fraction of the photo "
        "width, and a short note about the choice."
    )


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
