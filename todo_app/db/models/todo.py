"""
清单 / 待办模型：TodoListRecord + TodoRecord

database 后端的持久化结构。删除清单时级联删除其下所有待办。
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from todo_app.config import get_settings
from todo_app.db.models.base import Base
from todo_app.todos.schemas import NAME_MAX_LENGTH

settings = get_settings()
_schema = settings.DB_SCHEMA


class TodoListRecord(Base):
    """待办清单"""

    __tablename__ = "lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), unique=True, comment="清单名称（全局唯一）"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), comment="创建时间"
    )

    todos: Mapped[list["TodoRecord"]] = relationship(
        back_populates="todo_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TodoRecord.id",
    )


class TodoRecord(Base):
    """清单下的单个待办"""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    list_id: Mapped[int] = mapped_column(
        ForeignKey(f"{_schema}.lists.id", ondelete="CASCADE"),
        index=True,
        comment="所属清单",
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), comment="待办内容")
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), comment="是否已完成"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), comment="创建时间"
    )

    todo_list: Mapped[TodoListRecord] = relationship(back_populates="todos")
