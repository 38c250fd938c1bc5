"""initial registry schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _version_column() -> sa.Column:
    return sa.Column("version", sa.Integer(), server_default="0", nullable=False)


def upgrade() -> None:
    user_roles = op.create_table(
        "user_roles",
        sa.Column("name", sa.String(length=50), primary_key=True),
        sa.Column("description", sa.String(length=255), nullable=True),
    )
    op.bulk_insert(
        user_roles,
        [
            {"name": "admin", "description": "Full access"},
            {"name": "user", "description": "Regular operator"},
        ],
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=128), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("second_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("display_name", sa.String(length=310), nullable=False),
        sa.Column(
            "user_role_name",
            sa.String(length=50),
            sa.ForeignKey("user_roles.name"),
            nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        _version_column(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_display_name", "users", ["display_name"])

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("token", sa.String(length=128), nullable=False, unique=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])

    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("city_name", sa.String(length=150), nullable=False),
        _version_column(),
    )
    op.create_index("ix_cities_city_name", "cities", ["city_name"], unique=True)

    op.create_table(
        "social_statuses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("social_status_name", sa.String(length=150), nullable=False),
        _version_column(),
    )
    op.create_index(
        "ix_social_statuses_social_status_name",
        "social_statuses",
        ["social_status_name"],
        unique=True,
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("second_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("display_name", sa.String(length=310), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id"), nullable=True),
        sa.Column(
            "social_status_id", sa.Integer(), sa.ForeignKey("social_statuses.id"), nullable=True
        ),
        _version_column(),
    )
    op.create_index("ix_customers_display_name", "customers", ["display_name"])
    op.create_index("ix_customers_city_id", "customers", ["city_id"])
    op.create_index("ix_customers_social_status_id", "customers", ["social_status_id"])


def downgrade() -> None:
    op.drop_table("customers")
    op.drop_table("social_statuses")
    op.drop_table("cities")
    op.drop_table("sessions")
    op.drop_table("users")
    op.drop_table("user_roles")
