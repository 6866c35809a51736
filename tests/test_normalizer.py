"""Tests for artwork normalization."""

from datetime import UTC, datetime, timedelta

import pytest

from inner_garden.domain.artworks import ARTWORK_STATUSES, Artwork
from inner_garden.services.normalizer import (
    extract_cloudinary_id,
    normalize_artwork,
    parse_number,
    parse_segments,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "status", ["available", "SOLD", " reserved ", "commission", "bogus", None, 42]
)
def test_status_is_always_allowed(status: object) -> None:
    artwork = normalize_artwork({"status": status}, now=NOW)

    assert artwork.status in ARTWORK_STATUSES


def test_unknown_status_falls_back_to_available() -> None:
    artwork = normalize_artwork({"status": "bogus"}, now=NOW)

    assert artwork.status == "available"


def test_size_is_computed_from_dimensions() -> None:
    artwork = normalize_artwork({"width_cm": 100, "height_cm": "150"}, now=NOW)

    assert artwork.size == "100 × 150 см"
    assert artwork.width_cm == 100
    assert artwork.height_cm == 150


def test_explicit_size_wins_over_dimensions() -> None:
    artwork = normalize_artwork(
        {"size": " 60x80 ", "width_cm": 100, "height_cm": 150}, now=NOW
    )

    assert artwork.size == "60x80"


def test_size_stays_empty_without_dimensions() -> None:
    artwork = normalize_artwork({"width_cm": 100}, now=NOW)

    assert artwork.size == ""


def test_new_artwork_gets_defaults_and_generated_id() -> None:
    artwork = normalize_artwork({"title_uk": "  Захід  "}, now=NOW)

    assert artwork.title_uk == "Захід"
    assert artwork.title_en == ""
    assert artwork.currency == "EUR"
    assert artwork.price is None
    assert artwork.segments == []
    assert len(artwork.id) == 20
    assert artwork.created_at == artwork.updated_at == "2026-03-01T09:00:00.000Z"


def test_input_id_is_used_for_new_records() -> None:
    artwork = normalize_artwork({"id": " art-1 "}, now=NOW)

    assert artwork.id == "art-1"


def test_existing_id_and_created_at_are_preserved() -> None:
    existing = normalize_artwork({"title_en": "Dawn"}, now=NOW)

    updated = normalize_artwork(
        {"id": "other", "title_en": "Dusk"}, existing, now=NOW + timedelta(hours=1)
    )

    assert updated.id == existing.id
    assert updated.title_en == "Dusk"
    assert updated.created_at == existing.created_at
    assert updated.updated_at == "2026-03-01T10:00:00.000Z"


def test_update_merges_over_existing_fields() -> None:
    existing = normalize_artwork(
        {"title_en": "Dawn", "price": 1200, "segments": ["calm"], "status": "sold"},
        now=NOW,
    )

    updated = normalize_artwork({"mood": "serene"}, existing, now=NOW)

    assert updated.title_en == "Dawn"
    assert updated.price == 1200
    assert updated.segments == ["calm"]
    assert updated.status == "sold"
    assert updated.mood == "serene"


def test_unparseable_numbers_fall_back_to_existing() -> None:
    existing = normalize_artwork({"price": 900}, now=NOW)

    updated = normalize_artwork({"price": "abc", "width_cm": ""}, existing, now=NOW)

    assert updated.price == 900
    assert updated.width_cm is None


def test_normalizing_twice_only_advances_updated_at() -> None:
    first = normalize_artwork(
        {
            "title_uk": "Сад",
            "width_cm": 50,
            "height_cm": 70,
            "segments": "calm, blue",
            "status": "reserved",
        },
        now=NOW,
    )

    second = normalize_artwork(first.to_dict(), first, now=NOW + timedelta(seconds=5))

    assert second.updated_at != first.updated_at
    assert second.to_dict() | {"updated_at": None} == first.to_dict() | {
        "updated_at": None
    }


def test_non_string_text_passes_through() -> None:
    artwork = normalize_artwork({"mood": 7}, now=NOW)

    assert artwork.mood == 7


def test_unknown_keys_are_dropped() -> None:
    artwork = normalize_artwork({"title_en": "Dawn", "hacker": True}, now=NOW)

    assert "hacker" not in artwork.to_dict()


def test_cloudinary_url_is_reduced_to_public_id() -> None:
    artwork = normalize_artwork(
        {
            "cloudinary_id": "https://res.cloudinary.com/demo/image/upload/"
            "f_auto,q_auto/v1712/gallery/sunset.jpg"
        },
        now=NOW,
    )

    assert artwork.cloudinary_id == "gallery/sunset"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("gallery/sunset", "gallery/sunset"),
        ("https://res.cloudinary.com/demo/image/upload/w_400/sunset.webp", "sunset"),
        ("https://res.cloudinary.com/demo/image/upload/v99/a/b.png", "a/b"),
        ("", ""),
    ],
)
def test_extract_cloudinary_id(value: str, expected: str) -> None:
    assert extract_cloudinary_id(value) == expected


def test_parse_segments_accepts_list_and_string() -> None:
    assert parse_segments([" calm ", "", None, "blue"]) == ["calm", "blue"]
    assert parse_segments("calm, ,blue,calm") == ["calm", "blue", "calm"]
    assert parse_segments(None, ["kept"]) == ["kept"]
    assert parse_segments(12) == []


def test_parse_number() -> None:
    assert parse_number("12.5") == 12.5
    assert parse_number(" 40 ") == 40
    assert parse_number(True, 3) == 3
    assert parse_number("nan") is None
    assert parse_number(None) is None


def test_from_dict_round_trips_record() -> None:
    artwork = normalize_artwork({"title_de": "Garten", "price": "99.5"}, now=NOW)

    assert Artwork.from_dict(artwork.to_dict()) == artwork


@pytest.mark.parametrize("candidate", [[], {}, ["a"], True, "   "])
def test_unusable_input_id_is_replaced(candidate: object) -> None:
    artwork = normalize_artwork({"id": candidate}, now=NOW)

    assert len(artwork.id) == 20
    assert "[" not in artwork.id


def test_integer_input_id_is_kept() -> None:
    assert normalize_artwork({"id": 42}, now=NOW).id == "42"
