"""initial billing schema

Revision ID: 9a1f3c7e2b10
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "9a1f3c7e2b10"
down_revision = None
branch_labels = None
depends_on = None


def _row_columns():
    """id, timestamps, publish and actor columns carried by every entity table"""
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("created_by_id", sa.Integer(), nullable=True),
        sa.Column("updated_by_id", sa.Integer(), nullable=True),
        sa.Column("locale", sa.String(10), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    ]


def _index_row_columns(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)
    op.create_index(op.f(f"ix_{table}_published_at"), table, ["published_at"], unique=False)


def upgrade() -> None:
    op.execute("CREATE TYPE billing_kind AS ENUM ('monthly', 'custom')")

    op.create_table(
        "users",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("blocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_row_columns(),
    )
    _index_row_columns("users")
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=False)

    op.create_table(
        "roles",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("type", sa.String(100), nullable=False),
        *_row_columns(),
    )
    _index_row_columns("roles")
    op.create_index(op.f("ix_roles_type"), "roles", ["type"], unique=False)

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_roles_user_id"), "user_roles", ["user_id"], unique=False)
    op.create_index(op.f("ix_user_roles_role_id"), "user_roles", ["role_id"], unique=False)

    op.create_table(
        "general_statuses",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_row_columns(),
    )
    _index_row_columns("general_statuses")
    op.create_index(op.f("ix_general_statuses_name"), "general_statuses", ["name"], unique=False)

    op.create_table(
        "transaction_categories",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_row_columns(),
    )
    _index_row_columns("transaction_categories")

    op.create_table(
        "billing_definitions",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("kind", postgresql.ENUM("monthly", "custom", name="billing_kind", create_type=False),
                  nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_row_columns(),
    )
    _index_row_columns("billing_definitions")
    op.create_index(op.f("ix_billing_definitions_kind"), "billing_definitions", ["kind"], unique=False)
    op.create_index(op.f("ix_billing_definitions_is_active"), "billing_definitions", ["is_active"], unique=False)

    op.create_table(
        "billings",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=True),
        *_row_columns(),
    )
    _index_row_columns("billings")
    op.create_index(op.f("ix_billings_document_id"), "billings", ["document_id"], unique=False)
    op.create_index(op.f("ix_billings_month"), "billings", ["month"], unique=False)
    op.create_index(op.f("ix_billings_year"), "billings", ["year"], unique=False)

    op.create_table(
        "billing_resident_links",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("billing_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["billing_id"], ["billings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_billing_resident_links_billing_id"), "billing_resident_links", ["billing_id"], unique=False)
    op.create_index(op.f("ix_billing_resident_links_user_id"), "billing_resident_links", ["user_id"], unique=False)

    op.create_table(
        "billing_status_links",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("billing_id", sa.Integer(), nullable=False),
        sa.Column("status_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["billing_id"], ["billings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["status_id"], ["general_statuses.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_billing_status_links_billing_id"), "billing_status_links", ["billing_id"], unique=False)
    op.create_index(op.f("ix_billing_status_links_status_id"), "billing_status_links", ["status_id"], unique=False)

    op.create_table(
        "billing_category_links",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("billing_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["billing_id"], ["billings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["transaction_categories.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_billing_category_links_billing_id"), "billing_category_links", ["billing_id"], unique=False)
    op.create_index(op.f("ix_billing_category_links_category_id"), "billing_category_links", ["category_id"], unique=False)

    op.create_table(
        "payment_configs",
        sa.Column("payment_fee", sa.BigInteger(), nullable=True),
        sa.Column("is_fixed_fee", sa.Boolean(), nullable=True),
        sa.Column("min_month_discount", sa.Integer(), nullable=True),
        sa.Column("max_fee", sa.BigInteger(), nullable=True),
        sa.Column("admin_name", sa.String(255), nullable=True),
        sa.Column("admin_email", sa.String(255), nullable=True),
        sa.Column("admin_phone", sa.String(50), nullable=True),
        *_row_columns(),
    )
    _index_row_columns("payment_configs")

    op.create_table(
        "scheduler_logs",
        sa.Column("document_id", sa.String(255), nullable=True),
        sa.Column("scheduler_code", sa.String(100), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=True),
        *_row_columns(),
    )
    _index_row_columns("scheduler_logs")
    op.create_index(op.f("ix_scheduler_logs_document_id"), "scheduler_logs", ["document_id"], unique=False)
    op.create_index(op.f("ix_scheduler_logs_scheduler_code"), "scheduler_logs", ["scheduler_code"], unique=False)


def downgrade() -> None:
    for table in (
        "scheduler_logs",
        "payment_configs",
        "billing_category_links",
        "billing_status_links",
        "billing_resident_links",
        "billings",
        "billing_definitions",
        "transaction_categories",
        "general_statuses",
        "user_roles",
        "roles",
        "users",
    ):
        op.drop_table(table)
    op.execute("DROP TYPE IF EXISTS billing_kind")
