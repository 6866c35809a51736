"""Artwork catalogue operations backed by a collection repository."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from inner_garden.domain.artworks import ARTWORK_STATUSES, Artwork, ArtworkCollection
from inner_garden.domain.errors import NotFoundError, ValidationError
from inner_garden.domain.timestamps import format_timestamp, utc_now
from inner_garden.services.normalizer import normalize_artwork

logger = logging.getLogger(__name__)


class ArtworkRepository(Protocol):
    """Persistence interface for the artwork collection."""

    def read(self) -> ArtworkCollection:
        """Return the persisted collection."""

    def write(self, collection: ArtworkCollection) -> ArtworkCollection:
        """Overwrite the persisted collection and return what was stored."""


@dataclass
class ArtworkService:
    """Read-modify-write operations over the whole artwork collection."""

    repository: ArtworkRepository
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_artworks(self) -> ArtworkCollection:
        """Return the current collection."""
        return self.repository.read()

    def get(self, artwork_id: str) -> Artwork:
        """Return a single artwork or raise ``NotFoundError``."""
        collection = self.repository.read()
        for artwork in collection.artworks:
            if artwork.id == artwork_id:
                return artwork
        raise NotFoundError

    def create(self, payload: Mapping[str, object]) -> Artwork:
        """Normalize a new artwork and insert it at the front."""
        collection = self.repository.read()
        artwork = normalize_artwork(payload, now=self.clock())
        if any(existing.id == artwork.id for existing in collection.artworks):
            raise ValidationError("Artwork id already exists")
        self.repository.write(
            ArtworkCollection(
                artworks=[artwork, *collection.artworks],
                updated_at=artwork.updated_at,
            )
        )
        logger.info("Artwork created", extra={"artwork_id": artwork.id})
        return artwork

    def update(self, artwork_id: str, payload: Mapping[str, object]) -> Artwork:
        """Merge ``payload`` over an existing artwork."""
        collection = self.repository.read()
        index = _find_index(collection, artwork_id)
        artworks = list(collection.artworks)
        artwork = normalize_artwork(payload, artworks[index], now=self.clock())
        artworks[index] = artwork
        self.repository.write(
            ArtworkCollection(artworks=artworks, updated_at=artwork.updated_at)
        )
        logger.info("Artwork updated", extra={"artwork_id": artwork_id})
        return artwork

    def delete(self, artwork_id: str) -> None:
        """Remove an artwork from the collection."""
        collection = self.repository.read()
        index = _find_index(collection, artwork_id)
        artworks = list(collection.artworks)
        del artworks[index]
        self.repository.write(
            ArtworkCollection(
                artworks=artworks, updated_at=format_timestamp(self.clock())
            )
        )
        logger.info("Artwork deleted", extra={"artwork_id": artwork_id})

    def summarize(self, collection: ArtworkCollection | None = None) -> dict[str, int]:
        """Count artworks per status."""
        resolved = collection or self.repository.read()
        summary = {status: 0 for status in ARTWORK_STATUSES}
        for artwork in resolved.artworks:
            summary[artwork.status] = summary.get(artwork.status, 0) + 1
        summary["total"] = len(resolved.artworks)
        return summary


def _find_index(collection: ArtworkCollection, artwork_id: str) -> int:
    for index, artwork in enumerate(collection.artworks):
        if artwork.id == artwork_id:
            return index
    raise NotFoundError
