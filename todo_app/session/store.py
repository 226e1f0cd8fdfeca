"""
会话记录：基于 Redis Hash 的会话级状态存储

每个会话一个 Hash Key（sess:{session_id}），TTL 每次写入时刷新。
field 约定：
- lists：会话后端的清单数据（ListArena JSON）
- flash：一次性提示消息（{"error": ..., "success": ...} JSON），下次渲染时取出并清除
"""

import json

import redis.asyncio as aioredis

from todo_app.cache.redis_client import RedisKeys
from todo_app.config import get_settings

settings = get_settings()


class SessionRecord:
    """单个会话的 Redis Hash 读写"""

    FIELD_LISTS = "lists"
    FIELD_FLASH = "flash"

    def __init__(self, redis: aioredis.Redis, session_id: str, ttl: int | None = None):
        self.redis = redis
        self.session_id = session_id
        self.ttl = ttl or settings.SESSION_TTL

    @property
    def key(self) -> str:
        return RedisKeys.session(self.session_id)

    async def get(self, field: str) -> str | None:
        return await self.redis.hget(self.key, field)

    async def set(self, field: str, value: str) -> None:
        """写入单个 field 并刷新 TTL"""
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self.key, field, value)
            pipe.expire(self.key, self.ttl)
            await pipe.execute()

    async def delete(self, field: str) -> None:
        await self.redis.hdel(self.key, field)


class FlashMessages:
    """一次性提示消息：写入后只在下一次渲染中出现"""

    ERROR = "error"
    SUCCESS = "success"

    def __init__(self, record: SessionRecord):
        self._record = record

    async def peek(self) -> dict[str, str]:
        raw = await self._record.get(SessionRecord.FIELD_FLASH)
        return json.loads(raw) if raw else {}

    async def set(self, kind: str, message: str) -> None:
        messages = await self.peek()
        messages[kind] = message
        await self._record.set(
            SessionRecord.FIELD_FLASH, json.dumps(messages, ensure_ascii=False)
        )

    async def error(self, message: str) -> None:
        await self.set(self.ERROR, message)

    async def success(self, message: str) -> None:
        await self.set(self.SUCCESS, message)

    async def pop(self) -> dict[str, str]:
        """取出全部消息并清除"""
        messages = await self.peek()
        if messages:
            await self._record.delete(SessionRecord.FIELD_FLASH)
        return messages
