"""
Todo 模块：清单 / 待办的数据模型、名称校验、展示辅助与存储

路由层通过 ListStore 接口访问清单，不关心后端是会话还是数据库。
"""

from todo_app.todos.errors import ListNotFoundError, NotFoundError, TodoNotFoundError
from todo_app.todos.schemas import Todo, TodoList
from todo_app.todos.store import ListStore

__all__ = [
    "ListNotFoundError",
    "ListStore",
    "NotFoundError",
    "Todo",
    "TodoList",
    "TodoNotFoundError",
]
