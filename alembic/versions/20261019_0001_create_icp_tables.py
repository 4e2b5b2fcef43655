"""create questions, system_prompt and prompt_results tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tag", sa.String(length=100), server_default=sa.text("'untagged'"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_created_at", "questions", ["created_at"], unique=False)
    op.create_index("ix_questions_tag", "questions", ["tag"], unique=False)

    op.create_table(
        "system_prompt",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Human-readable template name"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_system_prompt_updated_at", "system_prompt", ["updated_at"], unique=False)

    op.create_table(
        "prompt_results",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("domain_url", sa.String(length=2048), nullable=False),
        sa.Column(
            "prompt_input",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Snapshot of the request payload sent for this domain",
        ),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_prompt_results_domain_url", "prompt_results", ["domain_url"], unique=False)
    op.create_index("ix_prompt_results_created_at", "prompt_results", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_prompt_results_created_at", table_name="prompt_results")
    op.drop_index("ix_prompt_results_domain_url", table_name="prompt_results")
    op.drop_table("prompt_results")
    op.drop_index("ix_system_prompt_updated_at", table_name="system_prompt")
    op.drop_table("system_prompt")
    op.drop_index("ix_questions_tag", table_name="questions")
    op.drop_index("ix_questions_created_at", table_name="questions")
    op.drop_table("questions")
