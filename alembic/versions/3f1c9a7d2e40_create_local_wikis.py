"""create_local_wikis

Revision ID: 3f1c9a7d2e40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'local_wikis',
        sa.Column('id',         sa.String(length=36),  nullable=False),
        sa.Column('dbname',     sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_local_wikis_dbname', 'local_wikis', ['dbname'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_local_wikis_dbname', table_name='local_wikis')
    op.drop_table('local_wikis')
