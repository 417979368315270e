"""create player, spin and game_state tables

Revision ID: 4a7c19d2e5b1
Revises:
Create Date: 2025-11-05 17:48:21.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4a7c19d2e5b1'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('phone', sa.String(length=64), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_player_email', 'player', ['email'])
        op.create_index('ix_player_created_at', 'player', ['created_at'])

    if 'spin' not in existing_tables:
        op.create_table(
            'spin',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id', ondelete='CASCADE'), nullable=False),
            sa.Column('zillow_value', sa.Integer(), nullable=False),
            sa.Column('realtor_value', sa.Integer(), nullable=False),
            sa.Column('homes_value', sa.Integer(), nullable=False),
            sa.Column('google_value', sa.Integer(), nullable=False),
            sa.Column('smart_sign_value', sa.Integer(), nullable=False),
            sa.Column('banana_count', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('base_score', sa.Integer(), nullable=False),
            sa.Column('bonus_multiplier', sa.Numeric(precision=3, scale=1), nullable=True),
            sa.Column('total_score', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_spin_player_id', 'spin', ['player_id'])
        op.create_index('ix_spin_created_at', 'spin', ['created_at'])
        op.create_index('ix_spin_total_score', 'spin', ['total_score'])
        op.create_index('ix_spin_player_id_created_at', 'spin', ['player_id', 'created_at'])

    if 'game_state' not in existing_tables:
        op.create_table(
            'game_state',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
            sa.Column('state', sa.String(length=32), nullable=False),
            sa.Column('current_player_id', sa.Integer(), nullable=True),
            sa.Column('current_player_name', sa.String(length=100), nullable=True),
            sa.Column('current_spin_id', sa.Integer(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.CheckConstraint(
                "state IN ('idle', 'ready', 'spinning', 'bonus_wheel', 'results')",
                name='ck_game_state_state',
            ),
        )
        # Seed the singleton session row
        op.execute("INSERT INTO game_state (id, state, updated_at) VALUES (1, 'idle', CURRENT_TIMESTAMP)")


def downgrade():
    op.drop_table('game_state')
    op.drop_index('ix_spin_player_id_created_at', table_name='spin')
    op.drop_index('ix_spin_total_score', table_name='spin')
    op.drop_index('ix_spin_created_at', table_name='spin')
    op.drop_index('ix_spin_player_id', table_name='spin')
    op.drop_table('spin')
    op.drop_index('ix_player_created_at', table_name='player')
    op.drop_index('ix_player_email', table_name='player')
    op.drop_table('player')
