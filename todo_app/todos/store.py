"""
清单存储抽象基类

两个后端实现同一接口：
- SessionListStore：清单保存在会话记录中（Redis Hash，按会话隔离）
- DatabaseListStore：清单保存在 PG（所有会话共享）

约定：
1. 按 id 查找失败一律抛 ListNotFoundError / TodoNotFoundError
2. 每个变更方法都是独立的工作单元，返回前已持久化
3. 名称校验不在存储层做，由路由层调用 validators
"""

from abc import ABC, abstractmethod

from todo_app.todos.schemas import Todo, TodoList


class ListStore(ABC):
    """清单存储抽象基类"""

    @property
    @abstractmethod
    def backend(self) -> str:
        """后端名称（日志 / 指标标签用）"""
        ...

    # ── 清单 ──

    @abstractmethod
    async def all_lists(self) -> list[TodoList]:
        """全部清单，按存储顺序"""
        ...

    @abstractmethod
    async def find_list(self, list_id: int) -> TodoList:
        """按 id 查找清单，不存在时抛 ListNotFoundError"""
        ...

    @abstractmethod
    async def create_list(self, name: str) -> TodoList:
        ...

    @abstractmethod
    async def update_list_name(self, list_id: int, name: str) -> None:
        ...

    @abstractmethod
    async def delete_list(self, list_id: int) -> None:
        """删除清单及其全部待办"""
        ...

    # ── 待办 ──

    @abstractmethod
    async def create_todo(self, list_id: int, name: str) -> Todo:
        ...

    @abstractmethod
    async def delete_todo(self, list_id: int, todo_id: int) -> None:
        ...

    @abstractmethod
    async def update_todo_status(self, list_id: int, todo_id: int, completed: bool) -> None:
        ...

    @abstractmethod
    async def mark_all_todos_complete(self, list_id: int) -> None:
        ...
