from __future__ import annotations

from decimal import Decimal
from html import escape
from typing import Mapping, Sequence

from fairshare.db.models import Participant, Payment
from fairshare.ledger import Ledger
from fairshare.money import format_money
from fairshare.services.reports import ExpenseSummary, recent_payments
from fairshare.services.settlement import Transfer


def format_participants(participants: Sequence[Participant]) -> str:
    if not participants:
        return "👥 No participants yet. Add one with /adduser &lt;name&gt;."
    lines = ["👥 <b>Participants</b>"]
    for participant in participants:
        lines.append(f"#{participant.id} {escape(participant.name)}")
    return "\n".join(lines)


def format_payment_line(payment: Payment, symbol: str) -> str:
    involved = ", ".join(escape(name) for name in payment.involved_names)
    return (
        f"#{payment.id} {payment.date.isoformat()} <b>{escape(payment.payer_name)}</b> paid "
        f"{format_money(payment.amount, symbol)}\n"
        f"    {escape(payment.purpose)} • {escape(payment.category)} • split: {involved}"
    )


def format_payments(payments: Sequence[Payment], symbol: str, title: str = "💸 <b>Payments</b>") -> str:
    if not payments:
        return "No payments recorded yet."
    return "\n".join([title, *(format_payment_line(payment, symbol) for payment in payments)])


def format_balances(ledger: Ledger, balances: Mapping[int, Decimal], symbol: str) -> str:
    if not balances:
        return "🎉 All debts settled! No outstanding balances."
    lines = ["⚖️ <b>Current balances</b>"]
    for user_id, balance in balances.items():
        name = escape(ledger.participant_name(user_id))
        if balance > 0:
            lines.append(f"{name}: should receive {format_money(balance, symbol)}")
        else:
            lines.append(f"{name}: owes {format_money(abs(balance), symbol)}")
    return "\n".join(lines)


def format_settlements(ledger: Ledger, transfers: Sequence[Transfer], symbol: str) -> str:
    if not transfers:
        return "No settlements needed."
    lines = ["🤝 <b>Suggested settlements</b>"]
    for transfer in transfers:
        lines.append(
            f"{escape(ledger.participant_name(transfer.from_id))} should pay "
            f"{escape(ledger.participant_name(transfer.to_id))} {format_money(transfer.amount, symbol)}"
        )
    return "\n".join(lines)


def _format_totals(totals: Mapping[str, Decimal], summary: ExpenseSummary, symbol: str) -> list[str]:
    if not totals:
        return ["No expenses recorded."]
    return [
        f"{escape(key)}: {format_money(total, symbol)} ({summary.share_of_total(total)}%)"
        for key, total in totals.items()
    ]


def format_report(summary: ExpenseSummary, symbol: str) -> str:
    lines = [
        "📊 <b>Expense report</b>",
        f"Total expenses: {format_money(summary.grand_total, symbol)}",
        f"Average per person: {format_money(summary.average_per_person, symbol)}",
        f"Total payments: {summary.payment_count}",
        "",
        "<b>By category</b>",
        *_format_totals(summary.category_totals, summary, symbol),
        "",
        "<b>By payer</b>",
        *_format_totals(summary.payer_totals, summary, symbol),
    ]
    return "\n".join(lines)


def format_dashboard(ledger: Ledger, symbol: str) -> str:
    summary = ledger.summary()
    lines = [
        "🏠 <b>Dashboard</b>",
        f"Total friends: {len(ledger.participants)}",
        f"Total payments: {summary.payment_count}",
        f"Total expenses: {format_money(summary.grand_total, symbol)}",
        f"Outstanding balances: {len(ledger.balances())}",
        "",
        format_payments(recent_payments(ledger.payments), symbol, title="<b>Recent payments</b>"),
    ]
    return "\n".join(lines)
