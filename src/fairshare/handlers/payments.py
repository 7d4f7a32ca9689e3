from __future__ import annotations

from html import escape

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from fairshare.config import get_settings
from fairshare.errors import LedgerError
from fairshare.keyboards import payments_keyboard
from fairshare.money import format_money
from fairshare.services.formatting import format_payments
from fairshare.services.ledgers import get_global_service
from fairshare.services.reports import recent_payments
from fairshare.services.search import search_payments
from fairshare.utils.parse import PAY_USAGE, command_args, parse_id, parse_payment_command

payments_router = Router()

MAX_LISTED = 20


@payments_router.message(Command("pay"))
async def cmd_pay(message: Message) -> None:
    service = get_global_service()
    chat_id = message.chat.id
    try:
        command = parse_payment_command(command_args(message.text))
        ledger = await service.get_ledger(chat_id)
        involved = command.resolve_involved([participant.id for participant in ledger.participants])
        payment = await service.add_payment(
            chat_id,
            payer_id=command.payer_id,
            amount=command.amount,
            involved_ids=involved,
            purpose=command.purpose,
            category=command.category,
        )
    except LedgerError as exc:
        await message.answer(f"❌ {escape(exc.message)}\nUsage: {escape(PAY_USAGE)}")
        return

    symbol = get_settings().currency_symbol
    await message.answer(
        f"✅ Payment #{payment.id}: {escape(payment.payer_name)} paid "
        f"{format_money(payment.amount, symbol)} for {escape(payment.purpose)} "
        f"({escape(payment.category)}), split between {escape(', '.join(payment.involved_names))}"
    )


async def _answer_payments(message: Message, chat_id: int) -> None:
    ledger = await get_global_service().get_ledger(chat_id)
    payments = recent_payments(ledger.payments, MAX_LISTED)
    await message.answer(
        format_payments(payments, get_settings().currency_symbol),
        reply_markup=payments_keyboard(payments) if payments else None,
    )


@payments_router.message(Command("payments"))
async def cmd_payments(message: Message) -> None:
    await _answer_payments(message, message.chat.id)


@payments_router.callback_query(F.data == "menu:payments")
async def cb_menu_payments(callback: CallbackQuery) -> None:
    if callback.message is not None:
        await _answer_payments(callback.message, callback.message.chat.id)
    await callback.answer()


@payments_router.message(Command("search"))
async def cmd_search(message: Message) -> None:
    ledger = await get_global_service().get_ledger(message.chat.id)
    term = command_args(message.text)
    found = search_payments(term, ledger.payments)
    title = f"🔎 <b>Payments matching “{escape(term)}”</b>" if term else "💸 <b>Payments</b>"
    await message.answer(format_payments(recent_payments(found, MAX_LISTED), get_settings().currency_symbol, title=title))


async def _remove_payment(chat_id: int, payment_id: int) -> str:
    try:
        removed = await get_global_service().remove_payment(chat_id, payment_id)
    except LedgerError as exc:
        return f"❌ {escape(exc.message)}"
    if not removed:
        return f"Payment #{payment_id} not found."
    return f"🗑 Payment #{payment_id} deleted"


@payments_router.message(Command("delpay"))
async def cmd_delpay(message: Message) -> None:
    try:
        payment_id = parse_id(command_args(message.text))
    except LedgerError:
        await message.answer("Usage: /delpay &lt;id&gt;")
        return
    await message.answer(await _remove_payment(message.chat.id, payment_id))


@payments_router.callback_query(F.data.startswith("delpay:"))
async def cb_delpay(callback: CallbackQuery) -> None:
    if callback.message is None or not callback.data:
        await callback.answer()
        return
    payment_id = int(callback.data.split(":", 1)[1])
    text = await _remove_payment(callback.message.chat.id, payment_id)
    await callback.message.answer(text)
    await callback.answer()
