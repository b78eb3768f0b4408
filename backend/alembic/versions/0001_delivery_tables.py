"""delivery tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "shop_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("shop", sa.Text, nullable=False, unique=True),
        sa.Column("cutoff_time", sa.Text, nullable=False, server_default=sa.text("'14:00'")),
        sa.Column("daily_capacity", sa.Integer, nullable=False, server_default=sa.text("50")),
        sa.Column("max_days_ahead", sa.Integer, nullable=False, server_default=sa.text("30")),
        sa.Column("allow_weekend_delivery", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("timezone", sa.Text, nullable=False, server_default=sa.text("'UTC'")),
        sa.Column("show_on_cart_page", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.Text, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "blackout_dates",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("shop", sa.Text, nullable=False, index=True),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("recurring", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("label", sa.Text),
        sa.Column("created_at", sa.Text, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "product_delivery_cache",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("shop", sa.Text, nullable=False),
        sa.Column("product_id", sa.Text, nullable=False),
        sa.Column("enabled", sa.Integer),
        sa.Column("cutoff_hours", sa.Integer),
        sa.Column("max_days_ahead", sa.Integer),
        sa.Column("daily_capacity", sa.Integer),
        sa.Column("updated_at", sa.Text, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("shop", "product_id"),
    )
    op.create_table(
        "delivery_day_counts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("shop", sa.Text, nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("count", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.UniqueConstraint("shop", "date"),
    )


def downgrade():
    op.drop_table("delivery_day_counts")
    op.drop_table("product_delivery_cache")
    op.drop_table("blackout_dates")
    op.drop_table("shop_settings")
