"""
名称校验：纯函数，无副作用

返回 None 表示合法，否则返回首个违反的规则（长度优先于唯一性）。
"""

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from todo_app.todos.schemas import NAME_MAX_LENGTH, NAME_MIN_LENGTH, TodoList

INVALID_LENGTH = "invalid_length"
DUPLICATE_NAME = "duplicate_name"


class NameViolation(BaseModel):
    """校验失败结果：kind 供程序判断，message 直接展示给用户"""

    kind: Literal["invalid_length", "duplicate_name"]
    message: str


def _length_ok(name: str) -> bool:
    return NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def validate_list_name(
    name: str,
    lists: Iterable[TodoList],
    exclude_id: int | None = None,
) -> NameViolation | None:
    """
    校验清单名称。

    Args:
        name: 已去除首尾空白的名称
        lists: 当前全部清单
        exclude_id: 重命名时传入被改名清单自身的 id，不与自己比较
    """
    if not _length_ok(name):
        return NameViolation(
            kind=INVALID_LENGTH,
            message=f"List name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters.",
        )
    if any(lst.name == name and lst.id != exclude_id for lst in lists):
        return NameViolation(kind=DUPLICATE_NAME, message="List name must be unique.")
    return None


def validate_todo_name(name: str) -> NameViolation | None:
    """校验待办名称，只检查长度"""
    if not _length_ok(name):
        return NameViolation(
            kind=INVALID_LENGTH,
            message=f"Todo must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters.",
        )
    return None
