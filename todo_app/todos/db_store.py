"""
数据库后端：清单保存在 PG，所有会话共享

每个变更方法一个事务，返回前 commit。数据库会话由请求级依赖注入，
请求结束时关闭。
"""

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from todo_app.db.models.todo import TodoListRecord, TodoRecord
from todo_app.todos.errors import ListNotFoundError, TodoNotFoundError
from todo_app.todos.schemas import Todo, TodoList
from todo_app.todos.store import ListStore

log = structlog.get_logger()


class DatabaseListStore(ListStore):
    """基于 SQLAlchemy AsyncSession 的清单存储"""

    def __init__(self, db: AsyncSession):
        self._db = db

    @property
    def backend(self) -> str:
        return "database"

    async def _ensure_list(self, list_id: int) -> None:
        exists = await self._db.scalar(
            select(TodoListRecord.id).where(TodoListRecord.id == list_id)
        )
        if exists is None:
            raise ListNotFoundError(list_id)

    # ── 清单 ──

    async def all_lists(self) -> list[TodoList]:
        result = await self._db.execute(
            select(TodoListRecord)
            .options(selectinload(TodoListRecord.todos))
            .execution_options(populate_existing=True)
            .order_by(TodoListRecord.id)
        )
        return [TodoList.model_validate(record) for record in result.scalars()]

    async def find_list(self, list_id: int) -> TodoList:
        result = await self._db.execute(
            select(TodoListRecord)
            .options(selectinload(TodoListRecord.todos))
            .execution_options(populate_existing=True)
            .where(TodoListRecord.id == list_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise ListNotFoundError(list_id)
        return TodoList.model_validate(record)

    async def create_list(self, name: str) -> TodoList:
        record = TodoListRecord(name=name)
        self._db.add(record)
        await self._db.commit()
        log.info("清单已创建", backend=self.backend, list_id=record.id)
        return TodoList(id=record.id, name=record.name, todos=[])

    async def update_list_name(self, list_id: int, name: str) -> None:
        result = await self._db.execute(
            update(TodoListRecord).where(TodoListRecord.id == list_id).values(name=name)
        )
        if result.rowcount == 0:
            await self._db.rollback()
            raise ListNotFoundError(list_id)
        await self._db.commit()
        log.info("清单已重命名", backend=self.backend, list_id=list_id)

    async def delete_list(self, list_id: int) -> None:
        await self._ensure_list(list_id)
        await self._db.execute(delete(TodoRecord).where(TodoRecord.list_id == list_id))
        await self._db.execute(delete(TodoListRecord).where(TodoListRecord.id == list_id))
        await self._db.commit()
        log.info("清单已删除", backend=self.backend, list_id=list_id)

    # ── 待办 ──

    async def create_todo(self, list_id: int, name: str) -> Todo:
        await self._ensure_list(list_id)
        record = TodoRecord(list_id=list_id, name=name, completed=False)
        self._db.add(record)
        await self._db.commit()
        log.info("待办已添加", backend=self.backend, list_id=list_id, todo_id=record.id)
        return Todo(id=record.id, name=record.name, completed=False)

    async def delete_todo(self, list_id: int, todo_id: int) -> None:
        await self._ensure_list(list_id)
        result = await self._db.execute(
            delete(TodoRecord).where(TodoRecord.id == todo_id, TodoRecord.list_id == list_id)
        )
        if result.rowcount == 0:
            await self._db.rollback()
            raise TodoNotFoundError(list_id, todo_id)
        await self._db.commit()
        log.info("待办已删除", backend=self.backend, list_id=list_id, todo_id=todo_id)

    async def update_todo_status(self, list_id: int, todo_id: int, completed: bool) -> None:
        await self._ensure_list(list_id)
        result = await self._db.execute(
            update(TodoRecord)
            .where(TodoRecord.id == todo_id, TodoRecord.list_id == list_id)
            .values(completed=completed)
        )
        if result.rowcount == 0:
            await self._db.rollback()
            raise TodoNotFoundError(list_id, todo_id)
        await self._db.commit()
        log.info(
            "待办状态已更新",
            backend=self.backend,
            list_id=list_id,
            todo_id=todo_id,
            completed=completed,
        )

    async def mark_all_todos_complete(self, list_id: int) -> None:
        await self._ensure_list(list_id)
        result = await self._db.execute(
            update(TodoRecord).where(TodoRecord.list_id == list_id).values(completed=True)
        )
        await self._db.commit()
        log.info(
            "清单待办已全部完成",
            backend=self.backend,
            list_id=list_id,
            count=result.rowcount,
        )
