"""002: create expenses and expense_participants tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE expenses (
            id              SERIAL              PRIMARY KEY,
            user_id         INT                 NOT NULL REFERENCES users (id),
            description     TEXT                NOT NULL,
            amount          DOUBLE PRECISION    NOT NULL,
            created_at      TIMESTAMPTZ         NOT NULL,
            CONSTRAINT ck_expenses_amount_finite_gt_0 CHECK (amount > 0 AND amount < 'Infinity'::float8)
        );
    """)
    op.execute("CREATE INDEX idx_expenses_user_id ON expenses (user_id);")

    # One row per participant, the owner included
    op.execute("""
        CREATE TABLE expense_participants (
            expense_id      INT     NOT NULL REFERENCES expenses (id),
            user_id         INT     NOT NULL REFERENCES users (id),
            CONSTRAINT pk_expense_participants PRIMARY KEY (expense_id, user_id)
        );
    """)
    op.execute("CREATE INDEX idx_expense_participants_user_id ON expense_participants (user_id);")
    op.execute("COMMENT ON TABLE expenses IS 'Shared expenses, Append-Only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS expense_participants CASCADE;")
    op.execute("DROP TABLE IF EXISTS expenses CASCADE;")
