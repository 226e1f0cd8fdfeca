"""
会话后端：清单保存在会话记录的 lists field 中

存储结构（ListArena，model_dump_json 序列化）：
- next_id：会话内单调递增的 id 计数器，清单和待办共用，删除后不复用
- lists：id → 清单 的映射，插入顺序即存储顺序；每个清单内 todos 同样按 id 映射

id 在创建时生成并保持稳定，删除任意清单/待办不会让其他实体的 id 漂移。
"""

import structlog
from pydantic import BaseModel, Field

from todo_app.session.store import SessionRecord
from todo_app.todos.errors import ListNotFoundError, TodoNotFoundError
from todo_app.todos.schemas import Todo, TodoList
from todo_app.todos.store import ListStore

log = structlog.get_logger()


class StoredList(BaseModel):
    """会话中保存的清单"""

    id: int
    name: str
    todos: dict[int, Todo] = Field(default_factory=dict)

    def to_schema(self) -> TodoList:
        return TodoList(id=self.id, name=self.name, todos=list(self.todos.values()))


class ListArena(BaseModel):
    """会话内全部清单"""

    next_id: int = 1
    lists: dict[int, StoredList] = Field(default_factory=dict)

    def allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    def get_list(self, list_id: int) -> StoredList:
        stored = self.lists.get(list_id)
        if stored is None:
            raise ListNotFoundError(list_id)
        return stored

    def get_todo(self, list_id: int, todo_id: int) -> Todo:
        todo = self.get_list(list_id).todos.get(todo_id)
        if todo is None:
            raise TodoNotFoundError(list_id, todo_id)
        return todo


class SessionListStore(ListStore):
    """基于会话记录的清单存储，每次变更读 → 改 → 整体写回"""

    def __init__(self, record: SessionRecord):
        self._record = record

    @property
    def backend(self) -> str:
        return "session"

    async def _load(self) -> ListArena:
        raw = await self._record.get(SessionRecord.FIELD_LISTS)
        if raw:
            return ListArena.model_validate_json(raw)
        return ListArena()

    async def _save(self, arena: ListArena) -> None:
        await self._record.set(SessionRecord.FIELD_LISTS, arena.model_dump_json())

    # ── 清单 ──

    async def all_lists(self) -> list[TodoList]:
        arena = await self._load()
        return [stored.to_schema() for stored in arena.lists.values()]

    async def find_list(self, list_id: int) -> TodoList:
        arena = await self._load()
        return arena.get_list(list_id).to_schema()

    async def create_list(self, name: str) -> TodoList:
        arena = await self._load()
        stored = StoredList(id=arena.allocate_id(), name=name)
        arena.lists[stored.id] = stored
        await self._save(arena)
        log.info("清单已创建", backend=self.backend, list_id=stored.id)
        return stored.to_schema()

    async def update_list_name(self, list_id: int, name: str) -> None:
        arena = await self._load()
        arena.get_list(list_id).name = name
        await self._save(arena)
        log.info("清单已重命名", backend=self.backend, list_id=list_id)

    async def delete_list(self, list_id: int) -> None:
        arena = await self._load()
        arena.get_list(list_id)
        del arena.lists[list_id]
        await self._save(arena)
        log.info("清单已删除", backend=self.backend, list_id=list_id)

    # ── 待办 ──

    async def create_todo(self, list_id: int, name: str) -> Todo:
        arena = await self._load()
        stored = arena.get_list(list_id)
        todo = Todo(id=arena.allocate_id(), name=name, completed=False)
        stored.todos[todo.id] = todo
        await self._save(arena)
        log.info("待办已添加", backend=self.backend, list_id=list_id, todo_id=todo.id)
        return todo

    async def delete_todo(self, list_id: int, todo_id: int) -> None:
        arena = await self._load()
        arena.get_todo(list_id, todo_id)
        del arena.lists[list_id].todos[todo_id]
        await self._save(arena)
        log.info("待办已删除", backend=self.backend, list_id=list_id, todo_id=todo_id)

    async def update_todo_status(self, list_id: int, todo_id: int, completed: bool) -> None:
        arena = await self._load()
        arena.get_todo(list_id, todo_id).completed = completed
        await self._save(arena)
        log.info(
            "待办状态已更新",
            backend=self.backend,
            list_id=list_id,
            todo_id=todo_id,
            completed=completed,
        )

    async def mark_all_todos_complete(self, list_id: int) -> None:
        arena = await self._load()
        stored = arena.get_list(list_id)
        for todo in stored.todos.values():
            todo.completed = True
        await self._save(arena)
        log.info("清单待办已全部完成", backend=self.backend, list_id=list_id, count=len(stored.todos))
