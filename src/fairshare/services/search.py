from __future__ import annotations

from typing import Sequence

from fairshare.db.models import Payment


def search_payments(term: str, payments: Sequence[Payment]) -> list[Payment]:
    needle = term.strip().lower()
    if not needle:
        return list(payments)
    return [
        payment
        for payment in payments
        if needle in payment.purpose.lower() or needle in payment.category.lower()
    ]
