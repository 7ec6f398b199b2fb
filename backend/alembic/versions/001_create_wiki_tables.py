"""Create plants, profiles and revisions tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.db.types import GUID

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('scientific_name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(50), nullable=True),
        sa.Column('height', sa.String(50), nullable=True),
        sa.Column('edibilities', sa.JSON(), nullable=True),
        sa.Column('sun_preferences', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
    )

    op.create_table(
        'profiles',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('username', sa.String(100), unique=True, nullable=True),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
    )

    # Status is stored as a plain string (native_enum=False on the model)
    op.create_table(
        'revisions',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('field', sa.String(100), nullable=False),
        sa.Column('old_value', sa.JSON(), nullable=True),
        sa.Column('new_value', sa.JSON(), nullable=True),
        sa.Column('owner_id', GUID(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('reference', sa.String(50), nullable=False),
        sa.Column('reference_id', sa.String(100), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('approved_on', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('rejected_on', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('Pending', 'Approved', 'Rejected')",
            name='ck_revisions_status',
        ),
    )
    op.create_index('idx_revisions_reference', 'revisions', ['reference', 'reference_id'])


def downgrade() -> None:
    op.drop_index('idx_revisions_reference', table_name='revisions')
    op.drop_table('revisions')
    op.drop_table('profiles')
    op.drop_table('plants')
