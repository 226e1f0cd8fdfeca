"""
SQLAlchemy 声明基类：所有模型继承此 Base
使用 todo_app schema 做数据隔离
"""

from sqlalchemy.orm import DeclarativeBase

from todo_app.config import get_settings

settings = get_settings()


class Base(DeclarativeBase):
    """声明基类，统一使用 DB_SCHEMA"""

    __abstract__ = True

    __table_args__ = {"schema": settings.DB_SCHEMA}
