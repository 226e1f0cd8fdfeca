"""
Alembic 迁移环境：lists / todos 两张表，全部位于 DB_SCHEMA 下

数据库地址默认取 DATABASE_URL，可用 `alembic -x url=... upgrade head` 临时指定。
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import async_engine_from_config

from todo_app.config import get_settings
from todo_app.db.models import Base

settings = get_settings()
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = context.get_x_argument(as_dictionary=True).get("url") or settings.DATABASE_URL
if not database_url:
    raise RuntimeError("迁移需要数据库地址：配置 DATABASE_URL 或传入 -x url=...")
config.set_main_option("sqlalchemy.url", database_url)


def include_name(name, type_, parent_names) -> bool:
    # 同库里其他 schema 的表不参与 autogenerate 对比
    if type_ == "schema":
        return name == settings.DB_SCHEMA
    return True


def configure_context(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        version_table_schema=settings.DB_SCHEMA,
        include_schemas=True,
        include_name=include_name,
        compare_server_default=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """离线模式：只输出 SQL"""
    configure_context(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_with_connection(connection) -> None:
    configure_context(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        # 版本表也在该 schema 下，必须先于迁移存在
        await connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.DB_SCHEMA}"'))
        await connection.commit()
        await connection.run_sync(run_with_connection)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
