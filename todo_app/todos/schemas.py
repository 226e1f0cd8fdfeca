"""
清单 / 待办数据模型

TodoList、Todo 是两个存储后端共同的返回结构，
路由层和模板只依赖这里的字段，不关心数据来自会话还是数据库。
"""

from pydantic import BaseModel, ConfigDict, Field

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100


class Todo(BaseModel):
    """单个待办"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    completed: bool = False


class TodoList(BaseModel):
    """待办清单，todos 按存储顺序排列"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    todos: list[Todo] = Field(default_factory=list)
