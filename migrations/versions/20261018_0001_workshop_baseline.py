"""workshop baseline: jobs, catalog, roll inventory, usage ledger, issues, users

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "service_packages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "ppf_products",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("width_mm", sa.Integer(), nullable=False, server_default="1520"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("brand", "name", name="uq_ppf_products_brand_name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=120), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_no", sa.String(length=32), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=64), nullable=True),
        sa.Column("vehicle_brand", sa.String(length=120), nullable=False),
        sa.Column("vehicle_model", sa.String(length=120), nullable=False),
        sa.Column("vehicle_year", sa.String(length=16), nullable=True),
        sa.Column("vehicle_color", sa.String(length=64), nullable=True),
        sa.Column("vehicle_reg_no", sa.String(length=32), nullable=False),
        sa.Column("vehicle_vin", sa.String(length=64), nullable=True),
        sa.Column("package", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("promised_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("current_stage", sa.Integer(), nullable=False),
        sa.Column("stages", sa.JSON(), nullable=False),
        sa.Column("priority", sa.String(length=32), nullable=False),
        sa.Column("active_issue", sa.JSON(), nullable=True),
        sa.Column("assigned_to", sa.String(length=36), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("job_no"),
    )
    op.create_index("idx_jobs_status", "jobs", ["status"])
    op.create_index("idx_jobs_created_at", "jobs", ["created_at"])

    op.create_table(
        "ppf_rolls",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("roll_id", sa.String(length=64), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("batch_no", sa.String(length=64), nullable=True),
        sa.Column("total_length_mm", sa.Integer(), nullable=False),
        sa.Column("used_length_mm", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("used_length_mm >= 0", name="ck_ppf_rolls_used_non_negative"),
        sa.CheckConstraint("used_length_mm <= total_length_mm", name="ck_ppf_rolls_used_within_total"),
        sa.ForeignKeyConstraint(["product_id"], ["ppf_products.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("roll_id"),
    )
    op.create_index("idx_ppf_rolls_product", "ppf_rolls", ["product_id"])

    op.create_table(
        "job_ppf_usage",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("panel_name", sa.String(length=120), nullable=False),
        sa.Column("roll_id", sa.String(length=36), nullable=False),
        sa.Column("length_used_mm", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("length_used_mm > 0", name="ck_job_ppf_usage_length_positive"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["roll_id"], ["ppf_rolls.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_job_ppf_usage_job", "job_ppf_usage", ["job_id"])
    op.create_index("idx_job_ppf_usage_roll", "job_ppf_usage", ["roll_id"])

    op.create_table(
        "job_issues",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("stage_id", sa.Integer(), nullable=False),
        sa.Column("issue_type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("severity", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("reported_by", sa.String(length=255), nullable=False),
        sa.Column("resolved_by", sa.String(length=255), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolution_notes", sa.Text(), nullable=True),
        sa.Column("media_urls", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_job_issues_job", "job_issues", ["job_id"])
    op.create_index("idx_job_issues_job_status", "job_issues", ["job_id", "status"])


def downgrade() -> None:
    op.drop_index("idx_job_issues_job_status", table_name="job_issues")
    op.drop_index("idx_job_issues_job", table_name="job_issues")
    op.drop_table("job_issues")
    op.drop_index("idx_job_ppf_usage_roll", table_name="job_ppf_usage")
    op.drop_index("idx_job_ppf_usage_job", table_name="job_ppf_usage")
    op.drop_table("job_ppf_usage")
    op.drop_index("idx_ppf_rolls_product", table_name="ppf_rolls")
    op.drop_table("ppf_rolls")
    op.drop_index("idx_jobs_created_at", table_name="jobs")
    op.drop_index("idx_jobs_status", table_name="jobs")
    op.drop_table("jobs")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
    op.drop_table("ppf_products")
    op.drop_table("service_packages")
