"""seed_characters

Revision ID: 9b6e0d4c2a17
Revises: 3f1c9a2b7d40
Create Date: 2025-12-13 15:40:02.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "9b6e0d4c2a17"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Seed character master data."""
    characters = [
        ("TRAECHAN", "トレちゃん", "目標達成をサポートするあなたの相棒"),
        ("MASTER", "マスター", "あなたの成長を見守る師匠"),
    ]

    characters_table = sa.table(
        "characters",
        sa.column(
            "character_code",
            postgresql.ENUM("TRAECHAN", "MASTER", name="character_code"),
        ),
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
    )

    op.bulk_insert(
        characters_table,
        [
            {"character_code": code, "name": name, "description": description}
            for code, name, description in characters
        ],
    )


def downgrade() -> None:
    """Remove seeded characters."""
    op.execute("DELETE FROM characters WHERE character_code IN ('TRAECHAN', 'MASTER')")
