"""Initial schema: read-only court records.

Revision ID: 001
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── courts ────────────────────────────────────────────────────────
    op.create_table(
        "courts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.String(300), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("rating", sa.Float, default=0.0),
        sa.Column("cover_image", sa.String(500), nullable=True),
        sa.Column("phone_number", sa.String(40), nullable=True),
        sa.Column("is_active", sa.Boolean, default=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_courts_active", "courts", ["is_active"])
    op.create_index("idx_courts_name", "courts", ["name"])


def downgrade() -> None:
    op.drop_index("idx_courts_name", table_name="courts")
    op.drop_index("idx_courts_active", table_name="courts")
    op.drop_table("courts")
