"""Create inquiry, inquiry note, user and login attempt tables

Revision ID: 4a1e7c2b9d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4a1e7c2b9d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'inquiries',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('advertising_state', sa.String(length=100), nullable=False),
        sa.Column('advertising_market', sa.String(length=100), nullable=False),
        sa.Column('topic', sa.String(length=100), nullable=False),
        sa.Column('media', sa.String(length=100), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='unread'),
        sa.Column('is_forwarded', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_inquiries_created_at', 'inquiries', ['created_at'])
    op.create_index('ix_inquiries_updated_at', 'inquiries', ['updated_at'])
    op.create_index('ix_inquiries_first_name', 'inquiries', ['first_name'])
    op.create_index('ix_inquiries_last_name', 'inquiries', ['last_name'])
    op.create_index('ix_inquiries_phone', 'inquiries', ['phone'])
    op.create_index('ix_inquiries_email', 'inquiries', ['email'])
    op.create_index('ix_inquiries_status', 'inquiries', ['status'])

    op.create_table(
        'inquiry_notes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('inquiry_id', sa.String(length=36), sa.ForeignKey('inquiries.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_inquiry_notes_inquiry_id', 'inquiry_notes', ['inquiry_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=128), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='admin'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'login_attempts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_login_attempts_ip', 'login_attempts', ['ip'])
    op.create_index('ix_login_attempt_ip_created', 'login_attempts', ['ip', 'created_at'])


def downgrade():
    op.drop_index('ix_login_attempt_ip_created', table_name='login_attempts')
    op.drop_index('ix_login_attempts_ip', table_name='login_attempts')
    op.drop_table('login_attempts')
    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_inquiry_notes_inquiry_id', table_name='inquiry_notes')
    op.drop_table('inquiry_notes')
    for name in ('status', 'email', 'phone', 'last_name', 'first_name', 'updated_at', 'created_at'):
        op.drop_index(f'ix_inquiries_{name}', table_name='inquiries')
    op.drop_table('inquiries')
