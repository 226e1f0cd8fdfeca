"""
健康检查接口：探活 + 依赖服务状态
"""

import redis.asyncio as aioredis
import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.api.context import get_backend_db
from todo_app.cache.redis_client import get_redis

router = APIRouter(tags=["健康检查"])
log = structlog.get_logger()


@router.get("/health")
async def health_check(
    db: AsyncSession | None = Depends(get_backend_db),
    redis: aioredis.Redis = Depends(get_redis),
):
    """健康检查：校验 Redis（会话）+ PG（仅 database 后端）"""
    status = {"status": "ok", "redis": "ok"}

    try:
        await redis.ping()
    except Exception as e:
        status["redis"] = f"error: {e}"
        status["status"] = "degraded"
        log.error("Redis 健康检查失败", error=str(e))

    if db is not None:
        status["postgres"] = "ok"
        try:
            await db.execute(text("SELECT 1"))
        except Exception as e:
            status["postgres"] = f"error: {e}"
            status["status"] = "degraded"
            log.error("PG 健康检查失败", error=str(e))

    return status
