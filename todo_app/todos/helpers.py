"""
展示层辅助函数：完成状态 + 展示排序

只影响渲染，不修改存储顺序。同时注册为模板全局函数。
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

from todo_app.todos.schemas import Todo, TodoList

T = TypeVar("T")


def todo_count(todo_list: TodoList) -> int:
    return len(todo_list.todos)


def remaining_todo_count(todo_list: TodoList) -> int:
    return sum(1 for todo in todo_list.todos if not todo.completed)


def is_list_complete(todo_list: TodoList) -> bool:
    """至少有一个待办且全部完成"""
    return todo_count(todo_list) > 0 and remaining_todo_count(todo_list) == 0


def list_class(todo_list: TodoList) -> str | None:
    """清单的 CSS class，全部完成时为 complete"""
    return "complete" if is_list_complete(todo_list) else None


def display_order(items: Iterable[T], is_done: Callable[[T], bool]) -> list[T]:
    """稳定划分：未完成在前、已完成在后，组内保持原有相对顺序"""
    # sorted 是稳定排序，键只有 0/1 两个取值，等价于稳定划分
    return sorted(items, key=lambda item: 1 if is_done(item) else 0)


def order_lists(lists: Iterable[TodoList]) -> list[TodoList]:
    return display_order(lists, is_list_complete)


def order_todos(todos: Iterable[Todo]) -> list[Todo]:
    return display_order(todos, lambda todo: todo.completed)


TEMPLATE_HELPERS = {
    "todo_count": todo_count,
    "remaining_todo_count": remaining_todo_count,
    "is_list_complete": is_list_complete,
    "list_class": list_class,
    "order_lists": order_lists,
    "order_todos": order_todos,
}
