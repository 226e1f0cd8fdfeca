"""create_lists_and_todos

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 10:12:03.418207
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'lists',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, comment='清单名称（全局唯一）'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        schema='todo_app',
    )
    op.create_table(
        'todos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('list_id', sa.Integer(), nullable=False, comment='所属清单'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='待办内容'),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False, comment='是否已完成'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.ForeignKeyConstraint(['list_id'], ['todo_app.lists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        schema='todo_app',
    )
    op.create_index(op.f('ix_todo_app_todos_list_id'), 'todos', ['list_id'], unique=False, schema='todo_app')


def downgrade() -> None:
    op.drop_index(op.f('ix_todo_app_todos_list_id'), table_name='todos', schema='todo_app')
    op.drop_table('todos', schema='todo_app')
    op.drop_table('lists', schema='todo_app')
