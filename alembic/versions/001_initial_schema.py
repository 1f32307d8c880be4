"""Initial schema - auditors, recordings, audit_selections, evaluations, evaluation_changes.

Revision ID: 001
Revises:
Create Date: 2026-02-09

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "auditors",
        sa.Column("auditor_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("api_key_hash", sa.String(255), unique=True, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )

    op.create_table(
        "recordings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_path", sa.String(700), unique=True, nullable=False),
        sa.Column("client_code", sa.String(50), nullable=False),
        sa.Column("file_date", sa.Date(), nullable=False),
        sa.Column("file_size_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("agent_id", sa.String(20), nullable=True),
        sa.Column("agent_name", sa.String(120), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("call_duration_seconds", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_recordings_client_code", "recordings", ["client_code"])
    op.create_index("ix_recordings_file_date", "recordings", ["file_date"])
    op.create_index("ix_recordings_agent_id", "recordings", ["agent_id"])

    op.create_table(
        "audit_selections",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "recording_id", sa.Integer(), sa.ForeignKey("recordings.id"), unique=True, nullable=False
        ),
        sa.Column("agent_id", sa.String(20), nullable=False),
        sa.Column("agent_name", sa.String(120), nullable=True),
        sa.Column("client_code", sa.String(50), nullable=False),
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("week_end", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="selected"),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_selections_client_code", "audit_selections", ["client_code"])
    op.create_index("ix_audit_selections_week_start", "audit_selections", ["week_start"])
    op.create_index("ix_audit_selections_status", "audit_selections", ["status"])
    # One selection per agent per week; the lv client is audited exhaustively
    op.create_index(
        "uq_selection_agent_week",
        "audit_selections",
        ["agent_id", "week_start"],
        unique=True,
        postgresql_where=sa.text("client_code <> 'lv'"),
    )

    op.create_table(
        "evaluations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "recording_id", sa.Integer(), sa.ForeignKey("recordings.id"), unique=True, nullable=False
        ),
        sa.Column(
            "selection_id", sa.Integer(), sa.ForeignKey("audit_selections.id"), nullable=False
        ),
        sa.Column("rubric_id", sa.String(50), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("original_score", sa.Integer(), nullable=False),
        sa.Column("judgments", postgresql.JSONB(), nullable=False),
        sa.Column("original_judgments", postgresql.JSONB(), nullable=False),
        sa.Column("transcript", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("evaluator", sa.String(50), nullable=False, server_default="judgment_source"),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_evaluations_selection_id", "evaluations", ["selection_id"])

    op.create_table(
        "evaluation_changes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "evaluation_id", sa.Integer(), sa.ForeignKey("evaluations.id"), nullable=False
        ),
        sa.Column(
            "selection_id", sa.Integer(), sa.ForeignKey("audit_selections.id"), nullable=False
        ),
        sa.Column("actor_id", sa.String(36), nullable=False),
        sa.Column("actor_name", sa.String(120), nullable=False),
        sa.Column("changes", postgresql.JSONB(), nullable=False),
        sa.Column("score_before", sa.Integer(), nullable=True),
        sa.Column("score_after", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_evaluation_changes_selection_id", "evaluation_changes", ["selection_id"])


def downgrade() -> None:
    op.drop_index("ix_evaluation_changes_selection_id", table_name="evaluation_changes")
    op.drop_table("evaluation_changes")
    op.drop_index("ix_evaluations_selection_id", table_name="evaluations")
    op.drop_table("evaluations")
    op.drop_index("uq_selection_agent_week", table_name="audit_selections")
    op.drop_index("ix_audit_selections_status", table_name="audit_selections")
    op.drop_index("ix_audit_selections_week_start", table_name="audit_selections")
    op.drop_index("ix_audit_selections_client_code", table_name="audit_selections")
    op.drop_table("audit_selections")
    op.drop_index("ix_recordings_agent_id", table_name="recordings")
    op.drop_index("ix_recordings_file_date", table_name="recordings")
    op.drop_index("ix_recordings_client_code", table_name="recordings")
    op.drop_table("recordings")
    op.drop_table("auditors")
