"""File-backed artwork repository storing one JSON document."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path

from inner_garden.domain.artworks import ArtworkCollection
from inner_garden.domain.errors import StorageError
from inner_garden.domain.timestamps import format_timestamp, utc_now
from inner_garden.services.artworks import ArtworkRepository

logger = logging.getLogger(__name__)


@dataclass
class JsonArtworkRepository(ArtworkRepository):
    """JSON file implementation with atomic rename-on-write."""

    path: Path

    def read(self) -> ArtworkCollection:
        """Load the collection, returning an empty one if no file exists yet."""
        if not self.path.exists():
            return ArtworkCollection(artworks=[], updated_at=None)
        try:
            raw = self.path.read_text(encoding="utf-8")
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise TypeError("artwork document must be a JSON object")
            return ArtworkCollection.from_dict(payload)
        except (OSError, ValueError, TypeError) as exc:
            logger.exception("Failed to read artworks", extra={"path": str(self.path)})
            raise StorageError from exc

    def write(self, collection: ArtworkCollection) -> ArtworkCollection:
        """Persist the whole collection, stamping ``updated_at`` if missing."""
        if collection.updated_at is None:
            collection = replace(collection, updated_at=format_timestamp(utc_now()))
        document = json.dumps(collection.to_dict(), ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(document)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.exception("Failed to write artworks", extra={"path": str(self.path)})
            raise StorageError from exc
        return collection
