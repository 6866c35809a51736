"""Canonicalization of raw artwork input into artwork records."""

import math
import re
import secrets
from collections.abc import Mapping
from datetime import datetime
from urllib.parse import urlparse

from inner_garden.domain.artworks import (
    ARTWORK_STATUSES,
    DEFAULT_CURRENCY,
    DEFAULT_STATUS,
    LANGUAGES,
    Artwork,
)
from inner_garden.domain.timestamps import format_timestamp, utc_now

TEXT_FIELDS: tuple[str, ...] = (
    *(f"title_{language}" for language in LANGUAGES),
    *(f"description_{language}" for language in LANGUAGES),
    *(f"technique_{language}" for language in LANGUAGES),
    "cloudinary_id",
    "mood",
    "currency",
)
NUMERIC_FIELDS: tuple[str, ...] = ("price", "width_cm", "height_cm")

_VERSION_SEGMENT = re.compile(r"^v\d+$")
_TRANSFORMATION_SEGMENT = re.compile(r"^(?:c_|w_|h_|q_|f_|g_|t_|ar_|b_|e_)")
_FILE_EXTENSION = re.compile(r"\.[a-z0-9]+$", re.IGNORECASE)


def normalize_artwork(
    payload: Mapping[str, object],
    existing: Artwork | None = None,
    *,
    now: datetime | None = None,
) -> Artwork:
    """Build a canonical artwork from raw input merged over ``existing``."""
    previous = existing.to_dict() if existing else {}
    timestamp = format_timestamp(now or utc_now())

    values: dict[str, object] = {}
    for name in TEXT_FIELDS:
        values[name] = _text(payload.get(name), previous.get(name))
    values["currency"] = values["currency"] or DEFAULT_CURRENCY
    values["cloudinary_id"] = extract_cloudinary_id(values["cloudinary_id"])

    for name in NUMERIC_FIELDS:
        values[name] = parse_number(payload.get(name), previous.get(name))

    explicit_size = _text(payload.get("size"), None)
    values["size"] = compute_size(
        explicit_size,
        values["width_cm"],
        values["height_cm"],
        previous.get("size") or "",
    )
    values["segments"] = parse_segments(
        payload.get("segments"), previous.get("segments")
    )
    status = payload.get("status")
    values["status"] = normalize_status(
        previous.get("status") if status is None else status
    )

    return Artwork(
        id=_resolve_id(payload.get("id"), previous.get("id")),
        created_at=previous.get("created_at") or timestamp,
        updated_at=timestamp,
        **values,
    )


def normalize_status(value: object) -> str:
    """Map a raw status onto the allow-list, defaulting to available."""
    status = str(value or "").strip().lower()
    return status if status in ARTWORK_STATUSES else DEFAULT_STATUS


def parse_number(value: object, fallback: object = None) -> int | float | None:
    """Coerce number-like input, falling back when it can't be parsed."""
    parsed = _to_number(value)
    if parsed is None:
        parsed = _to_number(fallback)
    return parsed


def parse_segments(value: object, fallback: object = None) -> list[str]:
    """Split tags from a list or a comma-separated string."""
    if value is None:
        value = fallback
    if isinstance(value, str):
        items: list[object] = value.split(",")
    elif isinstance(value, list | tuple):
        items = list(value)
    else:
        return []
    segments = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag:
            segments.append(tag)
    return segments


def compute_size(
    explicit: object,
    width: int | float | None,
    height: int | float | None,
    fallback: str = "",
) -> object:
    """Return the explicit size, else ``W × H см`` from dimensions."""
    if explicit:
        return explicit
    if width is not None and height is not None:
        return f"{width} × {height} см"
    return fallback


def extract_cloudinary_id(value: object) -> object:
    """Reduce a pasted Cloudinary delivery URL to its public id."""
    if not isinstance(value, str) or "upload/" not in value:
        return value
    parts = [part for part in urlparse(value).path.split("/") if part]
    if "upload" not in parts:
        return value
    after_upload = parts[parts.index("upload") + 1 :]
    start = 0
    versions = [
        i for i, part in enumerate(after_upload) if _VERSION_SEGMENT.match(part)
    ]
    if versions:
        start = versions[0] + 1
    else:
        while start < len(after_upload) - 1:
            part = after_upload[start]
            if "," in part or _TRANSFORMATION_SEGMENT.match(part):
                start += 1
            else:
                break
    id_parts = after_upload[start:]
    if not id_parts:
        return ""
    id_parts[-1] = _FILE_EXTENSION.sub("", id_parts[-1])
    return "/".join(id_parts)


def generate_artwork_id() -> str:
    """Return a fresh random 20 hex character identifier."""
    return secrets.token_hex(10)


def _text(value: object, fallback: object) -> object:
    if value is None:
        value = fallback if fallback is not None else ""
    if isinstance(value, str):
        return value.strip()
    return value


def _to_number(value: object) -> int | float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def _resolve_id(candidate: object, existing_id: object) -> str:
    if existing_id:
        return str(existing_id)
    if isinstance(candidate, bool):
        return generate_artwork_id()
    if isinstance(candidate, int):
        return str(candidate)
    if isinstance(candidate, str) and candidate.strip():
        return candidate.strip()
    return generate_artwork_id()
