"""001: create users table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              SERIAL          PRIMARY KEY,
            email           VARCHAR(254)    NOT NULL,
            password_hash   VARCHAR(255)    NOT NULL,
            is_active       BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_email UNIQUE (email)
        );
    """)
    op.execute("COMMENT ON TABLE users IS 'Registered users, email/password login';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
