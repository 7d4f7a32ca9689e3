from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, Iterable, TypeVar

from fairshare.db.models import Category, Participant, Payment
from fairshare.db.repo import SnapshotStore
from fairshare.ledger import Ledger
from fairshare.logging import get_logger
from fairshare.money import MoneyLike

T = TypeVar("T")


class LedgerService:
    """Chat id -> Ledger registry backed by a snapshot store.

    Every mutation of a chat's ledger runs under that chat's lock, from
    loading the ledger to saving its full snapshot. If saving fails, the
    in-memory ledger is rolled back to the state before the mutation.
    """

    def __init__(self, store: SnapshotStore, *, clock: Callable[[], date] = date.today) -> None:
        self._store = store
        self._clock = clock
        self._ledgers: dict[int, Ledger] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._log = get_logger(__name__)

    def _lock_for(self, chat_id: int) -> asyncio.Lock:
        return self._locks.setdefault(chat_id, asyncio.Lock())

    async def _load(self, chat_id: int) -> Ledger:
        ledger = self._ledgers.get(chat_id)
        if ledger is None:
            snapshot = await self._store.load(chat_id)
            ledger = Ledger(snapshot, clock=self._clock)
            self._ledgers[chat_id] = ledger
            self._log.info("ledger.loaded", chat_id=chat_id, found=snapshot is not None)
        return ledger

    async def get_ledger(self, chat_id: int) -> Ledger:
        async with self._lock_for(chat_id):
            return await self._load(chat_id)

    async def _mutate(self, chat_id: int, action: Callable[[Ledger], T]) -> T:
        async with self._lock_for(chat_id):
            ledger = await self._load(chat_id)
            before = ledger.snapshot()
            result = action(ledger)
            if result is False:
                return result
            try:
                await self._store.save(chat_id, ledger.snapshot())
            except Exception:
                self._ledgers[chat_id] = Ledger(before, clock=self._clock)
                self._log.exception("ledger.save_failed", chat_id=chat_id)
                raise
            return result

    async def add_participant(self, chat_id: int, name: str) -> Participant:
        return await self._mutate(chat_id, lambda ledger: ledger.add_participant(name))

    async def remove_participant(self, chat_id: int, participant_id: int) -> bool:
        return await self._mutate(chat_id, lambda ledger: ledger.remove_participant(participant_id))

    async def add_payment(
        self,
        chat_id: int,
        payer_id: int,
        amount: MoneyLike,
        involved_ids: Iterable[int],
        purpose: str = "",
        category: Category | str | None = Category.GENERAL,
    ) -> Payment:
        return await self._mutate(
            chat_id,
            lambda ledger: ledger.add_payment(payer_id, amount, involved_ids, purpose, category),
        )

    async def remove_payment(self, chat_id: int, payment_id: int) -> bool:
        return await self._mutate(chat_id, lambda ledger: ledger.remove_payment(payment_id))

    async def clear(self, chat_id: int) -> None:
        async with self._lock_for(chat_id):
            ledger = await self._load(chat_id)
            await self._store.delete(chat_id)
            ledger.clear()
            del self._ledgers[chat_id]


_global_service: LedgerService | None = None


def set_global_service(service: LedgerService) -> None:
    global _global_service
    _global_service = service


def get_global_service() -> LedgerService:
    if _global_service is None:
        raise RuntimeError("Ledger service is not initialized")
    return _global_service
