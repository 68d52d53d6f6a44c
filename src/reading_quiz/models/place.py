"""Read-only view of a place as consumed from the PlaceCatalog."""

from pydantic import BaseModel, ConfigDict, Field


class PlaceRecord(BaseModel):
    """A place name and its canonical reading.

    Built from the ORM ``Place`` row via ``from_attributes`` so the SDK
    never touches SQLAlchemy objects directly.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    # Canonical answer, written in hiragana or katakana
    reading: str
    difficulty: int | None = Field(default=None, ge=1, le=3)
