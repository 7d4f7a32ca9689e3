from datetime import date
from decimal import Decimal

from fairshare.db.models import Payment
from fairshare.services.export import export_csv, export_filename


def make_payment(purpose: str, names: tuple[str, ...] = ("Alice", "Bob")) -> Payment:
    return Payment(
        id=7,
        payer_id=1,
        payer_name="Alice",
        amount=Decimal("12.5"),
        involved_ids=tuple(range(1, len(names) + 1)),
        involved_names=names,
        purpose=purpose,
        category="Food",
        date=date(2026, 5, 9),
    )


def test_export_header_and_row():
    lines = export_csv([make_payment("Lunch")]).split("\r\n")
    assert lines[0] == "Payment ID,Date,Payer,Amount,Purpose,Category,Involved Users"
    assert lines[1] == "7,2026-05-09,Alice,12.50,Lunch,Food,Alice; Bob"
    assert lines[2] == ""


def test_export_quotes_special_fields():
    content = export_csv([make_payment('Pizza, "large"\nextra cheese', ("O'Neil", "Bob, Jr."))])
    assert '"Pizza, ""large""\nextra cheese"' in content
    assert '"O\'Neil; Bob, Jr."' in content


def test_export_empty_has_header_only():
    assert export_csv([]) == "Payment ID,Date,Payer,Amount,Purpose,Category,Involved Users\r\n"


def test_export_filename():
    assert export_filename(date(2026, 10, 16)) == "fairshare_expenses_2026-10-16.csv"
