"""create employees table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'Employees',
        sa.Column('EmployeeId', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('Name', sa.String(length=255), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('Employees')
