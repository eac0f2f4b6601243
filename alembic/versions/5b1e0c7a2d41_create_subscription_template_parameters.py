"""create subscription_template_parameters table

Revision ID: 5b1e0c7a2d41
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b1e0c7a2d41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'subscription_template_parameters',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('subscription_id', sa.Uuid(), nullable=False),
        sa.Column('plan_id', sa.Uuid(), nullable=False),
        sa.Column('parameter_name', sa.String(length=256), nullable=False),
        sa.Column('parameter_value', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            'subscription_id', 'parameter_name', name='uq_subscription_template_parameter_name'
        ),
    )
    op.create_index(
        'ix_subscription_template_parameters_subscription_id',
        'subscription_template_parameters',
        ['subscription_id'],
        unique=False,
    )
    op.create_index(
        'ix_template_parameters_subscription_plan',
        'subscription_template_parameters',
        ['subscription_id', 'plan_id'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(
        'ix_template_parameters_subscription_plan', table_name='subscription_template_parameters'
    )
    op.drop_index(
        'ix_subscription_template_parameters_subscription_id',
        table_name='subscription_template_parameters',
    )
    op.drop_table('subscription_template_parameters')
