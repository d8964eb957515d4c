"""content collections

Revision ID: 20250305_0002
Revises: 20250220_0001
Create Date: 2025-03-05 00:00:00
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20250305_0002"
down_revision = "20250220_0001"
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    ]


def _tenant_columns():
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tenant_id", postgresql.UUID(as_uuid=True), nullable=False),
    ]


def _keys():
    return [
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb"))


def upgrade() -> None:
    op.create_table(
        "services",
        *_tenant_columns(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        *_keys(),
    )
    op.create_table(
        "team_members",
        *_tenant_columns(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("specialization", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        _json_list("education"),
        _json_list("certifications"),
        _json_list("languages"),
        sa.Column("order", sa.Integer(), nullable=True),
        *_timestamps(),
        *_keys(),
    )
    op.create_table(
        "testimonials",
        *_tenant_columns(),
        sa.Column("author", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("rating", sa.String(length=1), nullable=False, server_default=sa.text("'5'")),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        *_timestamps(),
        *_keys(),
    )
    op.create_table(
        "faqs",
        *_tenant_columns(),
        sa.Column("question", sa.String(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        *_timestamps(),
        *_keys(),
    )
    for table in ("services", "team_members", "testimonials", "faqs"):
        op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"], unique=False)


def downgrade() -> None:
    for table in ("faqs", "testimonials", "team_members", "services"):
        op.drop_index(f"ix_{table}_tenant_id", table_name=table)
        op.drop_table(table)
