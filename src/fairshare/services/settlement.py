from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Mapping

from fairshare.money import EPSILON, round2


@dataclass(frozen=True, slots=True)
class Transfer:
    from_id: int
    to_id: int
    amount: Decimal


def compute_settlements(balances: Mapping[int, Decimal]) -> List[Transfer]:
    # Greedy two-pointer matching in the mapping's own order; no sorting by size.
    creditors: list[tuple[int, Decimal]] = []
    debtors: list[tuple[int, Decimal]] = []

    for user_id, balance in balances.items():
        if balance > EPSILON:
            creditors.append((user_id, round2(balance)))
        elif balance < -EPSILON:
            debtors.append((user_id, round2(-balance)))

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debt_id, debt_amount = debtors[i]
        cred_id, cred_amount = creditors[j]

        transfer_amount = round2(min(debt_amount, cred_amount))
        transfers.append(Transfer(from_id=debt_id, to_id=cred_id, amount=transfer_amount))

        debt_amount = round2(debt_amount - transfer_amount)
        cred_amount = round2(cred_amount - transfer_amount)
        debtors[i] = (debt_id, debt_amount)
        creditors[j] = (cred_id, cred_amount)

        if debt_amount < EPSILON:
            i += 1
        if cred_amount < EPSILON:
            j += 1

    return transfers
