"""create tasks, subtasks and profiles

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-09-02 10:12:44.318204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from pgvector.sqlalchemy import Vector

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create the task manager tables."""
    op.execute("CREATE EXTENSION IF NOT EXISTS vector")

    # -- tasks --
    # user_id defaults to the caller so that clients insert without it
    op.create_table(
        "tasks",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            server_default=sa.text("auth.uid()"),
        ),
        sa.Column("embedding", Vector(384), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["auth.users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "priority IN ('low', 'medium', 'high')",
            name="ck_tasks_priority",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'in-progress', 'done')",
            name="ck_tasks_status",
        ),
    )
    op.create_index("ix_tasks_user_id", "tasks", ["user_id"])

    # HNSW index for fast cosine similarity search
    op.execute(
        """
        CREATE INDEX ix_tasks_embedding_hnsw
        ON tasks
        USING hnsw (embedding vector_cosine_ops)
        WITH (m = 16, ef_construction = 64)
        """
    )

    # -- subtasks --
    # Deleting a task keeps its subtasks; task_id is cleared
    op.create_table(
        "subtasks",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("task_id", sa.Uuid(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            server_default=sa.text("auth.uid()"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["auth.users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('pending', 'in-progress', 'done')",
            name="ck_subtasks_status",
        ),
    )
    op.create_index("ix_subtasks_task_id", "subtasks", ["task_id"])
    op.create_index("ix_subtasks_user_id", "subtasks", ["user_id"])

    # -- profiles (one per auth user, upserted by id) --
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["id"], ["auth.users.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Drop the task manager tables."""
    op.drop_table("profiles")
    op.drop_index("ix_subtasks_user_id", table_name="subtasks")
    op.drop_index("ix_subtasks_task_id", table_name="subtasks")
    op.drop_table("subtasks")
    op.execute("DROP INDEX IF EXISTS ix_tasks_embedding_hnsw")
    op.drop_index("ix_tasks_user_id", table_name="tasks")
    op.drop_table("tasks")
