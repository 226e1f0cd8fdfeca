"""
数据库引擎：AsyncEngine 创建 + AsyncSession 工厂

session 后端不需要数据库，引擎延迟到第一次使用时创建。
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todo_app.config import get_settings


@lru_cache
def get_engine() -> AsyncEngine:
    """单例获取 AsyncEngine"""
    settings = get_settings()
    connect_args = {}
    if settings.DATABASE_URL.startswith("postgresql+asyncpg"):
        connect_args["server_settings"] = {"search_path": settings.DB_SCHEMA}
    return create_async_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        echo=settings.DB_ECHO,
        connect_args=connect_args,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """单例获取 AsyncSession 工厂"""
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
