from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import BufferedInputFile, CallbackQuery, Message

from fairshare.config import get_settings
from fairshare.keyboards import clear_confirm_keyboard
from fairshare.services.export import export_csv, export_filename
from fairshare.services.formatting import (
    format_balances,
    format_dashboard,
    format_report,
    format_settlements,
)
from fairshare.services.ledgers import get_global_service

summary_router = Router()


async def _answer_settlements(message: Message, chat_id: int) -> None:
    ledger = await get_global_service().get_ledger(chat_id)
    symbol = get_settings().currency_symbol
    balances = ledger.balances()
    await message.answer(
        format_balances(ledger, balances, symbol) + "\n\n" + format_settlements(ledger, ledger.settlements(), symbol)
    )


async def _answer_report(message: Message, chat_id: int) -> None:
    ledger = await get_global_service().get_ledger(chat_id)
    await message.answer(format_report(ledger.summary(), get_settings().currency_symbol))


async def _answer_dashboard(message: Message, chat_id: int) -> None:
    ledger = await get_global_service().get_ledger(chat_id)
    await message.answer(format_dashboard(ledger, get_settings().currency_symbol))


@summary_router.message(Command("balances"))
async def cmd_balances(message: Message) -> None:
    ledger = await get_global_service().get_ledger(message.chat.id)
    await message.answer(format_balances(ledger, ledger.balances(), get_settings().currency_symbol))


@summary_router.message(Command("settle"))
async def cmd_settle(message: Message) -> None:
    await _answer_settlements(message, message.chat.id)


@summary_router.message(Command("report"))
async def cmd_report(message: Message) -> None:
    await _answer_report(message, message.chat.id)


@summary_router.message(Command("dashboard"))
async def cmd_dashboard(message: Message) -> None:
    await _answer_dashboard(message, message.chat.id)


@summary_router.callback_query(F.data.in_({"menu:settle", "menu:report", "menu:dashboard"}))
async def cb_menu_summary(callback: CallbackQuery) -> None:
    if callback.message is None or not callback.data:
        await callback.answer()
        return
    chat_id = callback.message.chat.id
    section = callback.data.split(":", 1)[1]
    if section == "settle":
        await _answer_settlements(callback.message, chat_id)
    elif section == "report":
        await _answer_report(callback.message, chat_id)
    else:
        await _answer_dashboard(callback.message, chat_id)
    await callback.answer()


@summary_router.message(Command("export"))
async def cmd_export(message: Message) -> None:
    ledger = await get_global_service().get_ledger(message.chat.id)
    if not ledger.payments:
        await message.answer("No payments to export.")
        return
    content = export_csv(ledger.payments)
    document = BufferedInputFile(
        content.encode("utf-8"),
        filename=export_filename(get_settings().today()),
    )
    await message.answer_document(document, caption=f"{len(ledger.payments)} payment(s)")


@summary_router.message(Command("clear"))
async def cmd_clear(message: Message) -> None:
    await message.answer(
        "⚠️ Clear all participants and payments of this chat? This cannot be undone.",
        reply_markup=clear_confirm_keyboard(),
    )


@summary_router.callback_query(F.data.startswith("clear:"))
async def cb_clear(callback: CallbackQuery) -> None:
    if callback.message is None or not callback.data:
        await callback.answer()
        return
    if callback.data == "clear:yes":
        await get_global_service().clear(callback.message.chat.id)
        await callback.message.answer("All data has been cleared.")
    else:
        await callback.message.answer("Nothing was cleared.")
    await callback.answer()
