"""003: seed test users

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# bcrypt hash of "secret"
_SECRET_HASH = "$2a$08$NNqRkMg.vGfhnvtyrsfVN.uTndun9TuctRpxs5k5NTHjcXybPTQAa"


def upgrade() -> None:
    op.execute(f"""
        INSERT INTO users (email, password_hash) VALUES
            ('test1@example.com', '{_SECRET_HASH}'),
            ('test2@example.com', '{_SECRET_HASH}'),
            ('test3@example.com', '{_SECRET_HASH}');
    """)


def downgrade() -> None:
    op.execute(
        "DELETE FROM users WHERE email IN "
        "('test1@example.com', 'test2@example.com', 'test3@example.com');"
    )
