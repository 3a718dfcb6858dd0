"""Create profiles, stripe_customers and stripe_subscriptions.

Revision ID: b7c1d2e3f4a5
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

from alembic import op

# revision identifiers, used by Alembic.
revision = "b7c1d2e3f4a5"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the billing tables.

    ``profiles`` is normally owned by the identity side; it is only created
    here when missing so a fresh database is usable.
    """
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS profiles (
            id UUID PRIMARY KEY,
            trial_ends_at TIMESTAMP WITH TIME ZONE
        )
        """
    )

    op.create_table(
        "stripe_customers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("stripe_customer_id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index(
        "idx_stripe_customers_user_customer",
        "stripe_customers",
        ["user_id", "stripe_customer_id"],
    )

    op.create_table(
        "stripe_subscriptions",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "customer_id",
            UUID(as_uuid=True),
            sa.ForeignKey("stripe_customers.id"),
            nullable=False,
        ),
        sa.Column("price_id", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "cancel_at_period_end", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("canceled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )


def downgrade() -> None:
    """Drop the billing tables; ``profiles`` is left in place."""
    op.drop_table("stripe_subscriptions")
    op.drop_index("idx_stripe_customers_user_customer", table_name="stripe_customers")
    op.drop_table("stripe_customers")
