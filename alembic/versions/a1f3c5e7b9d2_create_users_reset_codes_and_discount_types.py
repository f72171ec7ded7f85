"""create_users_reset_codes_and_discount_types

Revision ID: a1f3c5e7b9d2
Revises:
Create Date: 2024-03-20 11:24:57.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1f3c5e7b9d2"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # email referencia a users.email solo a nivel de aplicación
    op.create_table(
        "reset_code_passwords",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reset_code_passwords_code", "reset_code_passwords", ["code"], unique=True)
    op.create_index("ix_reset_code_passwords_email", "reset_code_passwords", ["email"])
    op.create_index("ix_reset_code_passwords_created_at", "reset_code_passwords", ["created_at"])

    op.create_table(
        "discount_types",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("discount_types.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_discount_types_parent_id", "discount_types", ["parent_id"])
    op.create_index("ix_discount_types_created_at", "discount_types", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_discount_types_created_at", table_name="discount_types")
    op.drop_index("ix_discount_types_parent_id", table_name="discount_types")
    op.drop_table("discount_types")

    op.drop_index("ix_reset_code_passwords_created_at", table_name="reset_code_passwords")
    op.drop_index("ix_reset_code_passwords_email", table_name="reset_code_passwords")
    op.drop_index("ix_reset_code_passwords_code", table_name="reset_code_passwords")
    op.drop_table("reset_code_passwords")

    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
