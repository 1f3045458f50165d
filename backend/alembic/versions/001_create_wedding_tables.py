"""Create users, invitations and confirmations tables

Revision ID: 001
Revises: None
Create Date: 2024-11-02 00:00:00.000000+00:00

What:  Initial schema for accounts, invitations and guest confirmations.
How:   Portable column types (sa.Uuid, timezone-aware DateTime) so the same
       migration runs on PostgreSQL and on SQLite for local work.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, comment="Login identifier, stored lower-cased"),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), server_default=sa.text("'user'"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "invitations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("invitation_code", sa.String(32), nullable=False),
        sa.Column("groom_name", sa.String(255), nullable=False),
        sa.Column("bride_name", sa.String(255), nullable=False),
        sa.Column("ceremony_date", sa.Date(), nullable=False),
        sa.Column("ceremony_time", sa.String(50), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("max_guests", sa.Integer(), server_default=sa.text("100"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_invitations"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_invitations_invitation_code", "invitations", ["invitation_code"], unique=True)
    op.create_index("idx_invitations_user_created", "invitations", ["user_id", "created_at"])

    op.create_table(
        "confirmations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("invitation_id", sa.Uuid(), nullable=False),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("guest_email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("plus_one", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("confirmed", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("confirmation_code", sa.String(32), nullable=False),
        sa.Column("qr_code_data", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), server_default=sa.text("'pending'"), nullable=False),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_confirmations"),
        sa.ForeignKeyConstraint(["invitation_id"], ["invitations.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_confirmations_confirmation_code", "confirmations", ["confirmation_code"], unique=True
    )
    op.create_index(
        "idx_confirmations_invitation_email", "confirmations", ["invitation_id", "guest_email"]
    )


def downgrade() -> None:
    op.drop_index("idx_confirmations_invitation_email", table_name="confirmations")
    op.drop_index("ix_confirmations_confirmation_code", table_name="confirmations")
    op.drop_table("confirmations")
    op.drop_index("idx_invitations_user_created", table_name="invitations")
    op.drop_index("ix_invitations_invitation_code", table_name="invitations")
    op.drop_table("invitations")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
