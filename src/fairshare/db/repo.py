from __future__ import annotations

from typing import Any, Optional, Protocol

import asyncpg

from fairshare.db.codec import dump_snapshot, load_snapshot
from fairshare.db.models import LedgerSnapshot
from fairshare.logging import get_logger, sql_logger


class Database:
    def __init__(self, dsn: str) -> None:
        self._dsn = dsn
        self._pool: asyncpg.Pool | None = None
        self._log = get_logger(__name__)

    async def connect(self) -> None:
        if self._pool is None:
            # asyncpg expects a plain postgresql:// scheme, without "+asyncpg"
            dsn = self._dsn.replace("+asyncpg", "")
            self._pool = await asyncpg.create_pool(dsn)
            self._log.info("db.pool.created")

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self._log.info("db.pool.closed")

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        await self._ensure_pool()
        assert self._pool
        sql_logger.info("sql.fetchrow", query=query, args=args)
        return await self._pool.fetchrow(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        await self._ensure_pool()
        assert self._pool
        sql_logger.info("sql.execute", query=query)
        return await self._pool.execute(query, *args)

    async def _ensure_pool(self) -> None:
        if self._pool is None:
            await self.connect()


class SnapshotStore(Protocol):
    async def load(self, chat_id: int) -> Optional[LedgerSnapshot]: ...

    async def save(self, chat_id: int, snapshot: LedgerSnapshot) -> None: ...

    async def delete(self, chat_id: int) -> None: ...


class LedgerRepository:
    """One JSON snapshot per chat, always written in full."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def load(self, chat_id: int) -> Optional[LedgerSnapshot]:
        row = await self.db.fetchrow("SELECT payload FROM ledgers WHERE chat_id = $1", chat_id)
        if row is None:
            return None
        return load_snapshot(row["payload"])

    async def save(self, chat_id: int, snapshot: LedgerSnapshot) -> None:
        await self.db.execute(
            """
            INSERT INTO ledgers (chat_id, payload, updated_at)
            VALUES ($1, $2::jsonb, now())
            ON CONFLICT (chat_id) DO UPDATE
                SET payload = EXCLUDED.payload,
                    updated_at = EXCLUDED.updated_at
            """,
            chat_id,
            dump_snapshot(snapshot),
        )

    async def delete(self, chat_id: int) -> None:
        await self.db.execute("DELETE FROM ledgers WHERE chat_id = $1", chat_id)
