"""add similarity search function and row level security

Revision ID: 8b4e6d2c1a55
Revises: 3f1c2a9b7d10
Create Date: 2026-09-02 11:40:07.902117

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b4e6d2c1a55"
down_revision: str | Sequence[str] | None = "3f1c2a9b7d10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

OWNED_TABLES = {
    "tasks": "user_id",
    "subtasks": "user_id",
    "profiles": "id",
}


def upgrade() -> None:
    """Owner-only policies and the ranked task search procedure."""
    for table, owner_column in OWNED_TABLES.items():
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
        op.execute(
            f"""
            CREATE POLICY {table}_owner_all ON {table}
            FOR ALL TO authenticated
            USING (auth.uid() = {owner_column})
            WITH CHECK (auth.uid() = {owner_column})
            """
        )

    # Runs with the caller's privileges, so the policies above apply too.
    # Ties are broken by id to keep the ordering stable across calls.
    op.execute(
        """
        CREATE OR REPLACE FUNCTION search_tasks_by_similarity(
            query_embedding vector(384),
            similarity_threshold float DEFAULT 0.7,
            match_count int DEFAULT 5
        )
        RETURNS TABLE (
            id uuid,
            title text,
            priority varchar,
            status varchar,
            user_id uuid,
            created_at timestamptz,
            updated_at timestamptz,
            similarity float
        )
        LANGUAGE sql STABLE
        AS $$
            SELECT
                t.id,
                t.title,
                t.priority,
                t.status,
                t.user_id,
                t.created_at,
                t.updated_at,
                1 - (t.embedding <=> query_embedding) AS similarity
            FROM tasks t
            WHERE t.embedding IS NOT NULL
              AND t.user_id = auth.uid()
              AND 1 - (t.embedding <=> query_embedding) >= similarity_threshold
            ORDER BY t.embedding <=> query_embedding, t.id
            LIMIT match_count;
        $$
        """
    )
    op.execute(
        "GRANT EXECUTE ON FUNCTION search_tasks_by_similarity(vector, float, int) "
        "TO authenticated"
    )


def downgrade() -> None:
    """Drop the search procedure and the owner policies."""
    op.execute("DROP FUNCTION IF EXISTS search_tasks_by_similarity(vector, float, int)")
    for table in OWNED_TABLES:
        op.execute(f"DROP POLICY IF EXISTS {table}_owner_all ON {table}")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY")
