"""Initial schema - permissions and role_permissions.

Revision ID: 001
Revises:
Create Date: 2026-09-28

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("conditions", JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_permissions_name", "permissions", ["name"], unique=True)
    op.create_index("ix_permissions_resource", "permissions", ["resource"])
    op.create_index("ix_permissions_action", "permissions", ["action"])

    op.create_table(
        "role_permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column(
            "permission_id",
            sa.UUID(),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("granted_by", sa.String(255), nullable=True),
    )
    op.create_index("ix_role_permissions_role", "role_permissions", ["role"])
    op.create_index(
        "ix_role_permissions_role_permission",
        "role_permissions",
        ["role", "permission_id"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("role_permissions")
    op.drop_table("permissions")
