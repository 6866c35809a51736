"""Models for room visualization placement suggestions."""

from pydantic import BaseModel, Field


class PlacementSuggestion(BaseModel):
    """Where to hang an artwork on a photographed wall."""

    wall_detected: bool
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    width: float = Field(ge=0.0, le=1.0)
    notes: str | None = None
