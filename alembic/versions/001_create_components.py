"""Create components table for saved inspector components.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE TABLE components (
            id              UUID PRIMARY KEY,
            code            TEXT NOT NULL,
            original_code   TEXT NOT NULL,
            properties      JSONB NOT NULL DEFAULT '{}'::jsonb,
            title           TEXT NOT NULL DEFAULT 'Untitled Component',
            description     TEXT NOT NULL DEFAULT '',
            created_at      TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at      TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    # List and search both order by most recent update
    op.execute("CREATE INDEX idx_components_updated_at ON components (updated_at DESC);")
    op.execute("CREATE INDEX idx_components_created_at ON components (created_at);")


def downgrade():
    op.execute("DROP TABLE IF EXISTS components CASCADE;")
