"""In-memory stand-in for the asyncpg pool.

Understands exactly the statements the repositories issue, keeps rows in
insertion order (which is creation order) and records every call so tests can
assert that nothing reached the store.
"""
import json
import uuid
from contextlib import asynccontextmanager

import pytest


class FakeConnection:
    """Answers the repository queries from two in-memory tables."""

    def __init__(self, pool: "FakePool"):
        self.pool = pool

    def _record(self, method: str, query: str, args: tuple) -> None:
        self.pool.calls.append((method, " ".join(query.split()), args))
        if self.pool.fail_with is not None:
            raise self.pool.fail_with

    async def fetch(self, query: str, *args):
        self._record("fetch", query, args)
        if "FROM collections" in query:
            return [dict(row) for row in self.pool.collections]
        rows = self.pool.items
        if "WHERE collection_id::text = $1" in query:
            rows = [row for row in rows if row["collection_id"] == args[0]]
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *args):
        self._record("fetchrow", query, args)
        if "INSERT INTO gallery_items" in query:
            if self.pool.insert_returns_nothing:
                return None
            item_type, title, content, collection_id, metadata = args
            row = {
                "id": str(uuid.uuid4()),
                "type": item_type,
                "title": title,
                "content": content,
                "collection_id": collection_id,
                # asyncpg returns jsonb as text
                "metadata": metadata,
            }
            self.pool.items.append(row)
            return dict(row)

        table = (
            self.pool.collections if "FROM collections" in query else self.pool.items
        )
        return next((dict(row) for row in table if row["id"] == args[0]), None)

    async def fetchval(self, query: str, *args):
        self._record("fetchval", query, args)
        return 1


class FakePool:
    """Duck-types DatabasePool.acquire()."""

    def __init__(self):
        self.collections: list[dict] = []
        self.items: list[dict] = []
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None
        self.insert_returns_nothing = False

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self)

    def add_collection(self, name: str, description: str | None = None) -> str:
        collection_id = str(uuid.uuid4())
        self.collections.append(
            {"id": collection_id, "name": name, "description": description}
        )
        return collection_id

    def add_item(
        self,
        item_type: str,
        content: str,
        title: str | None = None,
        collection_id: str | None = None,
        metadata: dict | None = None,
    ) -> str:
        item_id = str(uuid.uuid4())
        self.items.append(
            {
                "id": item_id,
                "type": item_type,
                "title": title,
                "content": content,
                "collection_id": collection_id,
                "metadata": json.dumps(metadata) if metadata is not None else None,
            }
        )
        return item_id


@pytest.fixture
def fake_pool() -> FakePool:
    """An empty in-memory store."""
    return FakePool()


@pytest.fixture
def seeded_pool() -> FakePool:
    """A store with two collections, filed, unfiled and dangling items."""
    pool = FakePool()
    travel = pool.add_collection("Travel", "Places worth going back to")
    reading = pool.add_collection("Reading")
    pool.add_item("image", "https://x.test/lisbon.png", "Lisbon", travel)
    pool.add_item("text", "Remember the tram 28 at dawn", None, None)
    pool.add_item("pdf", "https://x.test/essay.pdf", "Essay", reading,
                  {"author": "M. Montaigne", "date": "1580"})
    pool.add_item("link", "https://x.test/porto", "Porto", travel,
                  {"description": "Guide"})
    pool.add_item("link", "https://x.test/gone", None, str(uuid.uuid4()))
    return pool
