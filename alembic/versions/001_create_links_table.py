"""Create links table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the links table."""
    op.create_table(
        "links",
        sa.Column(
            "code",
            sa.String(8),
            nullable=False,
            comment="Short code for the URL (6-8 characters of [A-Za-z0-9])",
        ),
        sa.Column(
            "target_url",
            sa.Text(),
            nullable=False,
            comment="The URL to redirect to",
        ),
        sa.Column(
            "total_clicks",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Number of redirects served for this code",
        ),
        sa.Column(
            "last_clicked_at",
            sa.DateTime(),
            nullable=True,
            comment="Time of the most recent redirect",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("code", name=op.f("pk_links")),
        sa.CheckConstraint(
            "total_clicks >= 0",
            name=op.f("ck_links_total_clicks_non_negative"),
        ),
    )
    op.create_index(op.f("ix_links_created_at"), "links", ["created_at"])


def downgrade() -> None:
    """Drop the links table."""
    op.drop_index(op.f("ix_links_created_at"), table_name="links")
    op.drop_table("links")
