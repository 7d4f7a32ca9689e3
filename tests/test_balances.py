from datetime import date
from decimal import Decimal
from itertools import permutations

from fairshare.db.models import Participant, Payment
from fairshare.services.balances import compute_balances, payment_share

A, B, C, D = (Participant(1, "A"), Participant(2, "B"), Participant(3, "C"), Participant(4, "D"))
NAMES = {1: "A", 2: "B", 3: "C", 4: "D"}


def make_payment(payment_id: int, payer_id: int, amount: str, involved: tuple[int, ...]) -> Payment:
    return Payment(
        id=payment_id,
        payer_id=payer_id,
        payer_name=NAMES[payer_id],
        amount=Decimal(amount),
        involved_ids=involved,
        involved_names=tuple(NAMES[i] for i in involved),
        purpose="test",
        category="General",
        date=date(2026, 1, 1),
    )


def test_single_payment_split_three_ways():
    balances = compute_balances([A, B, C], [make_payment(1, 1, "30.00", (1, 2, 3))])
    assert balances == {1: Decimal("20.00"), 2: Decimal("-10.00"), 3: Decimal("-10.00")}


def test_mutual_payments_cancel_out():
    payments = [make_payment(1, 1, "10.00", (1, 2)), make_payment(2, 2, "10.00", (1, 2))]
    assert compute_balances([A, B], payments) == {}


def test_rounding_residual_stays_with_payer():
    payment = make_payment(1, 1, "19.99", (2, 3, 4))
    assert payment_share(payment) == Decimal("6.66")

    balances = compute_balances([A, B, C, D], [payment])
    assert balances == {
        1: Decimal("19.99"),
        2: Decimal("-6.66"),
        3: Decimal("-6.66"),
        4: Decimal("-6.66"),
    }
    assert sum(balances.values()) == Decimal("0.01")


def test_rounding_residual_when_payer_is_involved():
    balances = compute_balances([A, B, C], [make_payment(1, 1, "19.99", (1, 2, 3))])
    assert balances[1] == Decimal("13.33")
    assert balances[2] == balances[3] == Decimal("-6.66")


def test_conservation_without_deletions():
    payments = [
        make_payment(1, 1, "30.00", (1, 2, 3)),
        make_payment(2, 2, "45.50", (1, 2)),
        make_payment(3, 3, "12.00", (1, 2, 3, 4)),
        make_payment(4, 4, "10.00", (1, 2, 3)),
    ]
    balances = compute_balances([A, B, C, D], payments)
    assert abs(sum(balances.values())) <= Decimal("0.01")


def test_result_independent_of_payment_order():
    payments = [
        make_payment(1, 1, "19.99", (1, 2, 3)),
        make_payment(2, 2, "7.01", (2, 3)),
        make_payment(3, 3, "100.00", (1, 2, 3, 4)),
    ]
    expected = compute_balances([A, B, C, D], payments)
    for order in permutations(payments):
        assert compute_balances([A, B, C, D], list(order)) == expected


def test_deleted_involved_participant_is_skipped():
    # B is gone: A keeps the full credit, B's share is simply not charged to anyone.
    balances = compute_balances([A, C], [make_payment(1, 1, "30.00", (1, 2, 3))])
    assert balances == {1: Decimal("20.00"), 3: Decimal("-10.00")}


def test_deleted_payer_gets_no_credit():
    balances = compute_balances([A, C], [make_payment(1, 2, "30.00", (1, 2, 3))])
    assert balances == {1: Decimal("-10.00"), 3: Decimal("-10.00")}


def test_empty_split_is_ignored():
    broken = make_payment(1, 1, "30.00", ())
    assert compute_balances([A, B], [broken]) == {}
