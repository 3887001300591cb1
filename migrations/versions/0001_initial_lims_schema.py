"""initial lims schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _json():
    return sa.JSON(none_as_null=True).with_variant(postgresql.JSONB(none_as_null=True), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("doctor", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_patients_name", "patients", ["name"])

    op.create_table(
        "tests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("price", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("duration", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=False, server_default="Active"),
        sa.Column("sample_types", _json(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tests_code", "tests", ["code"], unique=True)

    op.create_table(
        "test_parameters",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("test_id", sa.Integer(), sa.ForeignKey("tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("normal_range", sa.String(length=255), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("test_id", "name", name="uq_test_parameters_test_name"),
    )
    op.create_index("ix_test_parameters_test_id", "test_parameters", ["test_id"])

    op.create_table(
        "samples",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("accession_number", sa.String(length=50), nullable=False),
        sa.Column("sample_type", sa.String(length=20), nullable=False),
        sa.Column("collection_date", sa.Date(), nullable=False),
        sa.Column("collection_time", sa.Time(), nullable=False),
        sa.Column("priority", sa.String(length=10), nullable=False, server_default="Normal"),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_samples_patient_id", "samples", ["patient_id"])
    op.create_index("ix_samples_accession_number", "samples", ["accession_number"], unique=True)

    op.create_table(
        "sample_tests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sample_id", sa.Integer(), sa.ForeignKey("samples.id", ondelete="CASCADE"), nullable=False),
        sa.Column("test_id", sa.Integer(), sa.ForeignKey("tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Pending"),
        sa.Column("results", _json(), nullable=True),
        sa.Column("unrecognized_results", _json(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("sample_id", "test_id", name="uq_sample_tests_sample_test"),
    )
    op.create_index("ix_sample_tests_sample_id", "sample_tests", ["sample_id"])
    op.create_index("ix_sample_tests_test_id", "sample_tests", ["test_id"])

    op.create_table(
        "lab_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("logo", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("lab_settings")
    op.drop_index("ix_sample_tests_test_id", table_name="sample_tests")
    op.drop_index("ix_sample_tests_sample_id", table_name="sample_tests")
    op.drop_table("sample_tests")
    op.drop_index("ix_samples_accession_number", table_name="samples")
    op.drop_index("ix_samples_patient_id", table_name="samples")
    op.drop_table("samples")
    op.drop_index("ix_test_parameters_test_id", table_name="test_parameters")
    op.drop_table("test_parameters")
    op.drop_index("ix_tests_code", table_name="tests")
    op.drop_table("tests")
    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")
