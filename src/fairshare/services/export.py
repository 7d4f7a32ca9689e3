from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable

from fairshare.db.models import Payment

CSV_HEADER = ["Payment ID", "Date", "Payer", "Amount", "Purpose", "Category", "Involved Users"]


def payment_row(payment: Payment) -> list[str]:
    return [
        str(payment.id),
        payment.date.isoformat(),
        payment.payer_name,
        f"{payment.amount:.2f}",
        payment.purpose,
        payment.category,
        "; ".join(payment.involved_names),
    ]


def export_csv(payments: Iterable[Payment]) -> str:
    """Render payments as CSV.

    Fields containing a comma, a quote, CR or LF are wrapped in quotes with
    inner quotes doubled (``csv.QUOTE_MINIMAL`` with the default CRLF line
    terminator).
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(CSV_HEADER)
    for payment in payments:
        writer.writerow(payment_row(payment))
    return buffer.getvalue()


def export_filename(day: date) -> str:
    return f"fairshare_expenses_{day.isoformat()}.csv"
