from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from fairshare.db.models import Category, LedgerSnapshot, Participant, Payment
from fairshare.errors import ConflictError, NotFoundError, ValidationError
from fairshare.logging import get_logger
from fairshare.money import MoneyLike, format_money, is_zero, round2
from fairshare.services.balances import compute_balances
from fairshare.services.reports import ExpenseSummary, summarize
from fairshare.services.settlement import Transfer, compute_settlements

DEFAULT_PURPOSE = "No description"

log = get_logger(__name__)


def parse_category(value: Category | str | None) -> Category:
    if value is None:
        return Category.GENERAL
    if isinstance(value, Category):
        return value
    text = value.strip()
    if not text:
        return Category.GENERAL
    for category in Category:
        if category.value.lower() == text.lower():
            return category
    allowed = ", ".join(category.value for category in Category)
    raise ValidationError(f"Unknown category {text!r}. Allowed: {allowed}")


class Ledger:
    """Participants and payments of one group, with their id counters.

    Mutations validate first and write second under a single lock, so a
    rejected call leaves the ledger exactly as it was. Balances, settlements
    and summaries are recomputed from the current collections on every call.
    """

    def __init__(
        self,
        snapshot: Optional[LedgerSnapshot] = None,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        snapshot = snapshot or LedgerSnapshot()
        self._participants: list[Participant] = list(snapshot.participants)
        self._payments: list[Payment] = list(snapshot.payments)
        self._next_participant_id = snapshot.next_participant_id
        self._next_payment_id = snapshot.next_payment_id
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot, *, clock: Callable[[], date] = date.today) -> "Ledger":
        return cls(snapshot, clock=clock)

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(
                participants=list(self._participants),
                payments=list(self._payments),
                next_participant_id=self._next_participant_id,
                next_payment_id=self._next_payment_id,
            )

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def payments(self) -> tuple[Payment, ...]:
        return tuple(self._payments)

    def get_participant(self, participant_id: int) -> Optional[Participant]:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        return None

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        for payment in self._payments:
            if payment.id == payment_id:
                return payment
        return None

    def participant_name(self, participant_id: int, default: str = "Unknown") -> str:
        participant = self.get_participant(participant_id)
        return participant.name if participant else default

    def add_participant(self, name: str) -> Participant:
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Participant name must not be empty")

        with self._lock:
            participant = Participant(id=self._next_participant_id, name=clean)
            self._participants.append(participant)
            self._next_participant_id += 1

        log.info("ledger.participant.added", participant_id=participant.id)
        return participant

    def remove_participant(self, participant_id: int) -> bool:
        with self._lock:
            participant = self.get_participant(participant_id)
            if participant is None:
                return False

            balance = compute_balances(self._participants, self._payments).get(participant_id)
            if balance is not None and not is_zero(balance):
                direction = "should receive" if balance > 0 else "owes"
                log.info("ledger.conflict", reason=ConflictError.BALANCE_OUTSTANDING, participant_id=participant_id)
                raise ConflictError(
                    f"Cannot delete {participant.name} with outstanding balance. "
                    f"{participant.name} {direction} {format_money(abs(balance))}.",
                    reason=ConflictError.BALANCE_OUTSTANDING,
                    details={
                        "participant_id": participant_id,
                        "balance": balance,
                        "direction": direction,
                    },
                )

            self._participants.remove(participant)

        log.info("ledger.participant.removed", participant_id=participant_id)
        return True

    def add_payment(
        self,
        payer_id: int,
        amount: MoneyLike,
        involved_ids: Iterable[int],
        purpose: str = "",
        category: Category | str | None = Category.GENERAL,
    ) -> Payment:
        rounded = round2(amount)
        if rounded <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")

        involved = tuple(dict.fromkeys(involved_ids))
        if not involved:
            raise ValidationError("A payment must be split with at least one participant")

        resolved_category = parse_category(category)
        clean_purpose = (purpose or "").strip() or DEFAULT_PURPOSE

        with self._lock:
            payer = self.get_participant(payer_id)
            if payer is None:
                raise NotFoundError(f"Payer #{payer_id} not found")

            involved_names: list[str] = []
            for user_id in involved:
                participant = self.get_participant(user_id)
                if participant is None:
                    raise NotFoundError(f"Participant #{user_id} not found")
                involved_names.append(participant.name)

            payment = Payment(
                id=self._next_payment_id,
                payer_id=payer.id,
                payer_name=payer.name,
                amount=rounded,
                involved_ids=involved,
                involved_names=tuple(involved_names),
                purpose=clean_purpose,
                category=resolved_category.value,
                date=self._clock(),
            )
            self._payments.append(payment)
            self._next_payment_id += 1

        log.info("ledger.payment.added", payment_id=payment.id, amount=str(payment.amount))
        return payment

    def remove_payment(self, payment_id: int) -> bool:
        with self._lock:
            payment = self.get_payment(payment_id)
            if payment is None:
                return False

            current_ids = {participant.id for participant in self._participants}
            if payment.payer_id not in current_ids:
                log.info("ledger.conflict", reason=ConflictError.PAYER_DELETED, payment_id=payment_id)
                raise ConflictError(
                    "Cannot delete payment: the payer has been deleted from the group.",
                    reason=ConflictError.PAYER_DELETED,
                    details={"payment_id": payment_id, "missing_ids": [payment.payer_id]},
                )

            missing = [user_id for user_id in payment.involved_ids if user_id not in current_ids]
            if missing:
                log.info("ledger.conflict", reason=ConflictError.INVOLVED_DELETED, payment_id=payment_id)
                raise ConflictError(
                    "Cannot delete payment: one or more involved participants have been deleted from the group.",
                    reason=ConflictError.INVOLVED_DELETED,
                    details={"payment_id": payment_id, "missing_ids": missing},
                )

            self._payments.remove(payment)

        log.info("ledger.payment.removed", payment_id=payment_id)
        return True

    def clear(self) -> None:
        with self._lock:
            self._participants.clear()
            self._payments.clear()
            self._next_participant_id = 1
            self._next_payment_id = 1
        log.info("ledger.cleared")

    def balances(self) -> dict[int, Decimal]:
        return compute_balances(self._participants, self._payments)

    def settlements(self) -> list[Transfer]:
        return compute_settlements(self.balances())

    def summary(self) -> ExpenseSummary:
        return summarize(self._payments, participant_count=len(self._participants))
