"""
请求级上下文：flash + 清单存储 + 路径 id 解析

替代全局会话状态：每个请求由依赖注入显式构造 RequestContext，
路由处理函数只通过它访问清单集合和 flash 消息。
"""

from dataclasses import dataclass

import redis.asyncio as aioredis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.cache.redis_client import get_redis
from todo_app.config import Settings, get_settings
from todo_app.db.engine import get_session_factory
from todo_app.session.store import FlashMessages, SessionRecord
from todo_app.todos.db_store import DatabaseListStore
from todo_app.todos.errors import ListNotFoundError, TodoNotFoundError
from todo_app.todos.session_store import SessionListStore
from todo_app.todos.store import ListStore

XHR_HEADER = "X-Requested-With"
XHR_VALUE = "XMLHttpRequest"


@dataclass
class RequestContext:
    """单个请求可见的状态句柄"""

    store: ListStore
    flash: FlashMessages
    is_xhr: bool = False


def is_xhr_request(request: Request) -> bool:
    """脚本发起的请求（非整页跳转），响应形态改为状态码 / 短文本"""
    return request.headers.get(XHR_HEADER) == XHR_VALUE


def parse_list_id(raw: str) -> int:
    """路径里的清单 id；无法解析时按不存在处理"""
    if not (raw.isascii() and raw.isdigit()):
        raise ListNotFoundError(raw)
    return int(raw)


def parse_todo_id(list_id: int, raw: str) -> int:
    """路径里的待办 id；无法解析时按不存在处理"""
    if not (raw.isascii() and raw.isdigit()):
        raise TodoNotFoundError(list_id, raw)
    return int(raw)


async def get_backend_db(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    """database 后端下打开数据库会话，请求结束自动关闭；session 后端不连库"""
    if settings.STORAGE_BACKEND != "database":
        yield None
        return
    async with get_session_factory()() as session:
        yield session


async def get_request_context(
    request: Request,
    redis: aioredis.Redis = Depends(get_redis),
    db: AsyncSession | None = Depends(get_backend_db),
) -> RequestContext:
    """FastAPI 依赖注入：构造请求上下文，并挂到 request.state 供异常处理器使用"""
    record = SessionRecord(redis, request.state.session_id)
    store: ListStore = DatabaseListStore(db) if db is not None else SessionListStore(record)
    ctx = RequestContext(
        store=store,
        flash=FlashMessages(record),
        is_xhr=is_xhr_request(request),
    )
    request.state.context = ctx
    return ctx
