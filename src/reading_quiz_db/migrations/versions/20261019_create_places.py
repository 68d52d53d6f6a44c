"""Create the places table.

Revision ID: 20261019_places
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import TIMESTAMP

# revision identifiers, used by Alembic.
revision = "20261019_places"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "places",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("reading", sa.Text, nullable=False),
        sa.Column("difficulty", sa.SmallInteger, nullable=True),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint("name <> ''", name="ck_name_present"),
        sa.CheckConstraint("reading <> ''", name="ck_reading_present"),
        sa.CheckConstraint(
            "difficulty IS NULL OR difficulty BETWEEN 1 AND 3",
            name="ck_difficulty_range",
        ),
    )


def downgrade() -> None:
    op.drop_table("places")
