"""Create users, auth_identities and generated_content tables

Revision ID: 3f1c2a7d9b40
Revises:
Create Date: 2026-10-19 11:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the identity, profile and saved-content tables."""
    op.create_table(
        'auth_identities',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('user_metadata', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_auth_identities_id', 'auth_identities', ['id'])
    op.create_index('ix_auth_identities_email', 'auth_identities', ['email'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('fullname', sa.String(), nullable=False),
        sa.Column('avatar', sa.String(), nullable=False),
        sa.Column('apikey', sa.String(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'generated_content',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('topic', sa.String(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
    )
    op.create_index('ix_generated_content_id', 'generated_content', ['id'])
    op.create_index('ix_generated_content_created_at', 'generated_content', ['created_at'])
    op.create_index('ix_generated_content_user_id', 'generated_content', ['user_id'])


def downgrade() -> None:
    """Drop the tables in reverse order."""
    op.drop_table('generated_content')
    op.drop_table('users')
    op.drop_table('auth_identities')
