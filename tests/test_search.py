from datetime import date
from decimal import Decimal

from fairshare.db.models import Payment
from fairshare.services.reports import recent_payments
from fairshare.services.search import search_payments


def make_payment(payment_id: int, purpose: str, category: str) -> Payment:
    return Payment(
        id=payment_id,
        payer_id=1,
        payer_name="A",
        amount=Decimal("1.00"),
        involved_ids=(1,),
        involved_names=("A",),
        purpose=purpose,
        category=category,
        date=date(2026, 1, 1),
    )


PAYMENTS = [
    make_payment(1, "Hotel in Goa", "Stay"),
    make_payment(2, "Seafood dinner", "Food"),
    make_payment(3, "Train tickets", "Travel"),
]


def test_search_matches_purpose_and_category_case_insensitive():
    assert [p.id for p in search_payments("FOOD", PAYMENTS)] == [2]
    assert [p.id for p in search_payments("goa", PAYMENTS)] == [1]
    assert [p.id for p in search_payments("t", PAYMENTS)] == [1, 3]


def test_blank_term_returns_everything():
    assert search_payments("   ", PAYMENTS) == PAYMENTS
    assert search_payments("", PAYMENTS) == PAYMENTS


def test_no_match():
    assert search_payments("casino", PAYMENTS) == []


def test_search_results_listed_newest_first():
    found = search_payments("t", PAYMENTS)
    assert [p.id for p in recent_payments(found, limit=20)] == [3, 1]
