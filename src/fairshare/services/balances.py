from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from fairshare.db.models import Participant, Payment
from fairshare.money import ZERO, is_zero, round2


def payment_share(payment: Payment) -> Decimal:
    if not payment.involved_ids:
        raise ValueError("payment must involve at least one participant")
    return round2(payment.amount / len(payment.involved_ids))


def compute_balances(participants: Sequence[Participant], payments: Iterable[Payment]) -> dict[int, Decimal]:
    """Net position of every current participant.

    Positive means the group owes the participant, negative means the
    participant owes the group. Involved ids that are no longer participants
    are skipped, so their share stays in the payer's credit; a payer that is
    no longer a participant gets no credit at all. Settled participants
    (``is_zero``) are left out of the result.
    """
    balances: dict[int, Decimal] = {participant.id: ZERO for participant in participants}

    for payment in payments:
        if not payment.involved_ids:
            continue

        share = payment_share(payment)
        if payment.payer_id in balances:
            balances[payment.payer_id] = round2(balances[payment.payer_id] + round2(payment.amount))

        for user_id in payment.involved_ids:
            if user_id in balances:
                balances[user_id] = round2(balances[user_id] - share)

    return {user_id: balance for user_id, balance in balances.items() if not is_zero(balance)}
