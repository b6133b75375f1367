"""add_catalog_and_junk_reports

Revision ID: 3e8d1f0b7a25
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3e8d1f0b7a25"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "expansions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("scrydex_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=True),
        sa.Column("series", sa.String(length=100), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_expansions_scrydex_id"), "expansions", ["scrydex_id"], unique=True)

    op.create_table(
        "cards",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("scrydex_card_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("number", sa.String(length=20), nullable=True),
        sa.Column("rarity", sa.String(length=100), nullable=True),
        sa.Column("expansion_id", sa.String(length=100), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["expansion_id"], ["expansions.scrydex_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cards_scrydex_card_id"), "cards", ["scrydex_card_id"], unique=True)
    op.create_index(op.f("ix_cards_name"), "cards", ["name"], unique=False)
    op.create_index(op.f("ix_cards_expansion_id"), "cards", ["expansion_id"], unique=False)

    op.create_table(
        "junk_reports",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("deal_id", sa.String(length=100), nullable=False),
        sa.Column("ebay_item_id", sa.String(length=100), nullable=False),
        sa.Column("ebay_title", sa.Text(), nullable=False),
        sa.Column("seller_name", sa.String(length=200), nullable=True),
        sa.Column(
            "learned_tokens",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_junk_reports_deal_id"), "junk_reports", ["deal_id"], unique=True)
    op.create_index(op.f("ix_junk_reports_ebay_item_id"), "junk_reports", ["ebay_item_id"], unique=False)
    op.create_index(op.f("ix_junk_reports_seller_name"), "junk_reports", ["seller_name"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_junk_reports_seller_name"), table_name="junk_reports")
    op.drop_index(op.f("ix_junk_reports_ebay_item_id"), table_name="junk_reports")
    op.drop_index(op.f("ix_junk_reports_deal_id"), table_name="junk_reports")
    op.drop_table("junk_reports")

    op.drop_index(op.f("ix_cards_expansion_id"), table_name="cards")
    op.drop_index(op.f("ix_cards_name"), table_name="cards")
    op.drop_index(op.f("ix_cards_scrydex_card_id"), table_name="cards")
    op.drop_table("cards")

    op.drop_index(op.f("ix_expansions_scrydex_id"), table_name="expansions")
    op.drop_table("expansions")
