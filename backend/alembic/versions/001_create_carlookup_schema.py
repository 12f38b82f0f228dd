"""Create CarLookup schema

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates roles, users, user_roles, car_makes and car_models.
How:   UUID primary keys generated by the application, TIMESTAMP WITH TIME
       ZONE audit columns, and a functional unique index on lower(name) so
       car make names are unique regardless of case.

Rollback: downgrade() drops every table (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "roles",
        sa.Column("role_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("role_id", name="pk_roles"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )

    op.create_table(
        "users",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("salt", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role_id", name="pk_user_roles"),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.role_id"], ondelete="CASCADE"),
    )

    # ── Catalogue ─────────────────────────────────────────────────────────
    op.create_table(
        "car_makes",
        sa.Column("make_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("country_of_origin", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("make_id", name="pk_car_makes"),
    )
    op.create_index(
        "ux_car_makes_name_lower",
        "car_makes",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "car_models",
        sa.Column("model_id", sa.Uuid(), nullable=False),
        sa.Column("make_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("model_year", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("model_id", name="pk_car_models"),
        sa.ForeignKeyConstraint(["make_id"], ["car_makes.make_id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("make_id", "name", "model_year", name="uq_car_models_make_name_year"),
    )
    op.create_index("ix_car_models_make_id", "car_models", ["make_id"])


def downgrade() -> None:
    op.drop_index("ix_car_models_make_id", table_name="car_models")
    op.drop_table("car_models")
    op.drop_index("ux_car_makes_name_lower", table_name="car_makes")
    op.drop_table("car_makes")
    op.drop_table("user_roles")
    op.drop_table("users")
    op.drop_table("roles")
