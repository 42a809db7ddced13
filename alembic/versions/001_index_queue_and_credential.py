"""Index queue and credential tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "index_queue",
        sa.Column("seq", sa.BigInteger(), sa.Identity(always=True), primary_key=True),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("queue_name", sa.String(128), nullable=False),
        sa.Column("record_id", sa.String(255), nullable=False),
        sa.Column("operation", sa.String(16), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("claimed_until", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_index_queue_id", "index_queue", ["id"], unique=True)
    op.create_index("ix_index_queue_name_seq", "index_queue", ["queue_name", "seq"])

    op.create_table(
        "credential",
        sa.Column("name", sa.String(64), primary_key=True),
        sa.Column("bearer_token", sa.Text(), nullable=False),
        sa.Column("site_id", sa.String(255), nullable=False, server_default=""),
        sa.Column("org_id", sa.String(255), nullable=False, server_default=""),
        sa.Column("org_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("site_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("base_url", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "available_sites",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("credential")
    op.drop_index("ix_index_queue_name_seq", table_name="index_queue")
    op.drop_index("ix_index_queue_id", table_name="index_queue")
    op.drop_table("index_queue")
