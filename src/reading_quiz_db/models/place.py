"""Place ORM model: one row per municipality in the quiz catalog."""

from sqlalchemy import CheckConstraint, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from reading_quiz_db.models.base import Base, TimestampMixin


class Place(TimestampMixin, Base):
    """A place name with its canonical reading.

    ``difficulty`` is 1 (city), 2 (town) or 3 (village), or null when unknown.
    """

    __tablename__ = "places"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Display name, e.g. "札幌市"
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Canonical answer in kana, e.g. "さっぽろし"
    reading: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_name_present"),
        CheckConstraint("reading <> ''", name="ck_reading_present"),
        CheckConstraint(
            "difficulty IS NULL OR difficulty BETWEEN 1 AND 3",
            name="ck_difficulty_range",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Place(id={self.id}, name={self.name!r}, "
            f"reading={self.reading!r}, difficulty={self.difficulty})>"
        )
