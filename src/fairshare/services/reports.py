from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from fairshare.db.models import Payment
from fairshare.money import ZERO, round2


@dataclass(slots=True)
class ExpenseSummary:
    category_totals: dict[str, Decimal] = field(default_factory=dict)
    payer_totals: dict[str, Decimal] = field(default_factory=dict)
    grand_total: Decimal = ZERO
    payment_count: int = 0
    participant_count: int = 0

    @property
    def average_per_person(self) -> Decimal:
        if self.participant_count <= 0:
            return ZERO
        return round2(self.grand_total / self.participant_count)

    def share_of_total(self, amount: Decimal) -> Decimal:
        """Percentage of the grand total, one decimal place."""
        if self.grand_total <= 0:
            return Decimal("0.0")
        return (amount * 100 / self.grand_total).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def summarize(payments: Iterable[Payment], participant_count: int = 0) -> ExpenseSummary:
    summary = ExpenseSummary(participant_count=participant_count)

    for payment in payments:
        category_total = summary.category_totals.get(payment.category, ZERO)
        summary.category_totals[payment.category] = round2(category_total + payment.amount)

        payer_total = summary.payer_totals.get(payment.payer_name, ZERO)
        summary.payer_totals[payment.payer_name] = round2(payer_total + payment.amount)

        summary.grand_total = round2(summary.grand_total + payment.amount)
        summary.payment_count += 1

    return summary


def recent_payments(payments: Sequence[Payment], limit: int = 5) -> list[Payment]:
    if limit <= 0:
        return []
    return list(reversed(payments[-limit:]))
