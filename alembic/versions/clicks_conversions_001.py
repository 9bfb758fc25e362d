"""clicks and conversions

Revision ID: clicks_conversions_001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = 'clicks_conversions_001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Clicks ---
    op.create_table('clicks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('affiliate_id', sa.Text(), nullable=False),
        sa.Column('campaign_id', sa.Text(), nullable=False),
        sa.Column('click_id', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_clicks_click_id'), 'clicks', ['click_id'], unique=True)
    op.create_index('ix_clicks_affiliate_created', 'clicks', ['affiliate_id', 'created_at'])

    # --- Conversions ---
    op.create_table('conversions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('click_ref', sa.Integer(), nullable=False),
        sa.Column('affiliate_id', sa.Text(), nullable=False),
        sa.Column('amount', sa.Numeric(), nullable=False),
        sa.Column('currency', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['click_ref'], ['clicks.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_conversions_click_ref'), 'conversions', ['click_ref'])
    op.create_index('ix_conversions_affiliate_created', 'conversions', ['affiliate_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_conversions_affiliate_created', table_name='conversions')
    op.drop_index(op.f('ix_conversions_click_ref'), table_name='conversions')
    op.drop_table('conversions')
    op.drop_index('ix_clicks_affiliate_created', table_name='clicks')
    op.drop_index(op.f('ix_clicks_click_id'), table_name='clicks')
    op.drop_table('clicks')
