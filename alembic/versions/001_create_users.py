"""001: create users table

Revision ID: 001
Revises:
Create Date: 2024-01-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id              SERIAL          PRIMARY KEY,
            name            VARCHAR(255)    NOT NULL,
            email           VARCHAR(255)    NOT NULL,
            active          BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at      TIMESTAMP       NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMP       NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_email   UNIQUE (email)
        );
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users (email);")
    op.execute("CREATE INDEX IF NOT EXISTS idx_users_active ON users (active);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
