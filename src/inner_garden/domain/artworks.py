"""Domain models for artworks and the persisted collection."""

from dataclasses import asdict, dataclass, field, fields

ARTWORK_STATUSES = ("available", "sold", "reserved", "commission")
DEFAULT_STATUS = "available"
DEFAULT_CURRENCY = "EUR"
LANGUAGES = ("uk", "en", "de")


@dataclass(frozen=True)
class Artwork:
    """One painting offered for sale, localized in three languages."""

    id: str
    title_uk: str = ""
    title_en: str = ""
    title_de: str = ""
    description_uk: str = ""
    description_en: str = ""
    description_de: str = ""
    price: float | None = None
    currency: str = DEFAULT_CURRENCY
    size: str = ""
    technique_uk: str = ""
    technique_en: str = ""
    technique_de: str = ""
    cloudinary_id: str = ""
    width_cm: float | None = None
    height_cm: float | None = None
    segments: list[str] = field(default_factory=list)
    mood: str = ""
    status: str = DEFAULT_STATUS
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "Artwork":
        """Build a record from persisted JSON, ignoring unknown keys."""
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known}
        values.setdefault("id", "")
        if values.get("segments") is None:
            values["segments"] = []
        return cls(**values)

    def to_dict(self) -> dict[str, object]:
        """Serialize the record to a JSON-compatible dict."""
        return asdict(self)

    def display_title(self) -> str:
        """Return the first non-empty localized title."""
        for language in LANGUAGES:
            title = getattr(self, f"title_{language}")
            if isinstance(title, str) and title:
                return title
        return "Untitled"


@dataclass(frozen=True)
class ArtworkCollection:
    """Ordered artwork list plus the collection-level update timestamp."""

    artworks: list[Artwork] = field(default_factory=list)
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "ArtworkCollection":
        """Build a collection from the persisted document."""
        raw_artworks = payload.get("artworks") or []
        if not isinstance(raw_artworks, list):
            raise TypeError("artworks must be a list")
        artworks = []
        for item in raw_artworks:
            if not isinstance(item, dict):
                raise TypeError("artwork entries must be objects")
            artworks.append(Artwork.from_dict(item))
        updated_at = payload.get("updated_at")
        return cls(artworks=artworks, updated_at=updated_at)

    def to_dict(self) -> dict[str, object]:
        """Serialize the collection to the persisted document shape."""
        return {
            "artworks": [artwork.to_dict() for artwork in self.artworks],
            "updated_at": self.updated_at,
        }
