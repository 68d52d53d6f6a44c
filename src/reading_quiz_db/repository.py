"""Async repository for the ``places`` table.

Implements the quiz SDK's ``PlaceCatalog`` interface.  All methods accept
an ``AsyncSession`` so the caller controls transaction boundaries; write
methods call ``flush()`` but never ``commit()``.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reading_quiz.interfaces import PlaceCatalog
from reading_quiz.models.place import PlaceRecord

from reading_quiz_db.models.place import Place


class PlaceRepository(PlaceCatalog):
    """Read/write operations on the ``places`` table."""

    # ------------------------------------------------------------------
    # Catalog reads
    # ------------------------------------------------------------------

    async def sample_random(self, db: AsyncSession, n: int) -> list[PlaceRecord]:
        """Return up to ``n`` distinct places in random order."""
        if n <= 0:
            return []
        stmt = select(Place).order_by(func.random()).limit(n)
        result = await db.execute(stmt)
        return [PlaceRecord.model_validate(row) for row in result.scalars().all()]

    async def find_by_id(self, db: AsyncSession, place_id: int) -> PlaceRecord | None:
        row = await db.get(Place, place_id)
        if row is None:
            return None
        return PlaceRecord.model_validate(row)

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Place))
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    async def replace_all(
        self, db: AsyncSession, places: list[dict]
    ) -> int:
        """Delete every place and insert ``places`` in its stead.

        Each entry is a dict with ``name``, ``reading`` and ``difficulty``.
        Returns the number of rows inserted.  The caller must commit.
        """
        await db.execute(delete(Place))
        db.add_all(Place(**entry) for entry in places)
        await db.flush()
        return len(places)
