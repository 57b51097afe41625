"""Create documents table

Revision ID: 3f1c9a7d2b40
Revises: 
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'documents',
        sa.Column('collection', sa.String(length=100), nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('data', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('collection', 'id')
    )

    # Job listings filter on status and order by creation time
    if op.get_bind().dialect.name == 'postgresql':
        op.execute(
            "CREATE INDEX IF NOT EXISTS ix_documents_jobs_status_created_at "
            "ON documents ((data->>'status'), (data->>'created_at')) "
            "WHERE collection = 'jobs'"
        )
        op.execute(
            "CREATE INDEX IF NOT EXISTS ix_documents_jobs_technician "
            "ON documents ((data->>'assigned_technician_id')) "
            "WHERE collection = 'jobs'"
        )


def downgrade() -> None:
    """Downgrade schema."""
    if op.get_bind().dialect.name == 'postgresql':
        op.execute("DROP INDEX IF EXISTS ix_documents_jobs_technician")
        op.execute("DROP INDEX IF EXISTS ix_documents_jobs_status_created_at")
    op.drop_table('documents')
