"""Tests for the Redis-backed session record and flash messages."""

import json

import pytest

from todo_app.session.store import FlashMessages, SessionRecord
from todo_app.todos.session_store import SessionListStore

SESSION_ID = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def record(fake_redis):
    return SessionRecord(fake_redis, SESSION_ID, ttl=60)


class TestSessionRecord:
    @pytest.mark.asyncio
    async def test_set_writes_hash_field_and_refreshes_ttl(self, record, fake_redis):
        await record.set("flash", "{}")

        assert fake_redis.hashes[f"sess:{SESSION_ID}"]["flash"] == "{}"
        assert fake_redis.ttls[f"sess:{SESSION_ID}"] == 60

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, fake_redis):
        mine = SessionListStore(SessionRecord(fake_redis, "a" * 32))
        theirs = SessionListStore(SessionRecord(fake_redis, "b" * 32))

        await mine.create_list("Mine")

        assert await theirs.all_lists() == []

    @pytest.mark.asyncio
    async def test_lists_field_is_json_arena(self, record, fake_redis):
        store = SessionListStore(record)
        todo_list = await store.create_list("Groceries")
        await store.create_todo(todo_list.id, "Milk")

        raw = json.loads(fake_redis.hashes[f"sess:{SESSION_ID}"]["lists"])

        assert raw["next_id"] == 3
        assert raw["lists"]["1"]["name"] == "Groceries"
        assert raw["lists"]["1"]["todos"]["2"]["name"] == "Milk"


class TestFlashMessages:
    @pytest.mark.asyncio
    async def test_pop_returns_and_clears(self, record):
        flash = FlashMessages(record)
        await flash.success("Saved.")

        assert await flash.pop() == {"success": "Saved."}
        assert await flash.pop() == {}

    @pytest.mark.asyncio
    async def test_error_and_success_coexist(self, record):
        flash = FlashMessages(record)
        await flash.error("Bad.")
        await flash.success("Good.")

        assert await flash.pop() == {"error": "Bad.", "success": "Good."}

    @pytest.mark.asyncio
    async def test_later_message_of_same_kind_wins(self, record):
        flash = FlashMessages(record)
        await flash.error("First.")
        await flash.error("Second.")

        assert await flash.peek() == {"error": "Second."}

    @pytest.mark.asyncio
    async def test_pop_keeps_lists_field(self, record, fake_redis):
        store = SessionListStore(record)
        await store.create_list("Groceries")
        flash = FlashMessages(record)
        await flash.success("Saved.")

        await flash.pop()

        assert [lst.name for lst in await store.all_lists()] == ["Groceries"]
