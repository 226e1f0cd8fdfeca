"""
模型统一导出：Alembic 自动发现需要导入所有模型
"""

from todo_app.db.models.base import Base
from todo_app.db.models.todo import TodoListRecord, TodoRecord

__all__ = ["Base", "TodoListRecord", "TodoRecord"]
