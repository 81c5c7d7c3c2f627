"""Initial schema -- pastes table.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pastes",
        sa.Column("id", sa.String(10), primary_key=True),
        sa.Column("envelope", sa.Text, nullable=False),
        sa.Column("language", sa.String(32), nullable=False, server_default="plaintext"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_pastes_expires_at", "pastes", ["expires_at"])


def downgrade() -> None:
    op.drop_index("ix_pastes_expires_at", table_name="pastes")
    op.drop_table("pastes")
