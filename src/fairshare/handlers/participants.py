from __future__ import annotations

from html import escape

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from fairshare.errors import LedgerError
from fairshare.keyboards import participants_keyboard
from fairshare.services.formatting import format_participants
from fairshare.services.ledgers import get_global_service
from fairshare.utils.parse import command_args, parse_id

participants_router = Router()


async def _answer_participants(message: Message, chat_id: int) -> None:
    ledger = await get_global_service().get_ledger(chat_id)
    participants = ledger.participants
    await message.answer(
        format_participants(participants),
        reply_markup=participants_keyboard(participants) if participants else None,
    )


@participants_router.message(Command("adduser"))
async def cmd_adduser(message: Message) -> None:
    name = command_args(message.text)
    try:
        participant = await get_global_service().add_participant(message.chat.id, name)
    except LedgerError as exc:
        await message.answer(f"❌ {escape(exc.message)}\nUsage: /adduser &lt;name&gt;")
        return
    await message.answer(f"✅ Added #{participant.id} {escape(participant.name)}")


@participants_router.message(Command("users"))
async def cmd_users(message: Message) -> None:
    await _answer_participants(message, message.chat.id)


@participants_router.callback_query(F.data == "menu:users")
async def cb_menu_users(callback: CallbackQuery) -> None:
    if callback.message is not None:
        await _answer_participants(callback.message, callback.message.chat.id)
    await callback.answer()


async def _remove_participant(chat_id: int, participant_id: int) -> str:
    service = get_global_service()
    ledger = await service.get_ledger(chat_id)
    participant = ledger.get_participant(participant_id)
    try:
        removed = await service.remove_participant(chat_id, participant_id)
    except LedgerError as exc:
        return f"❌ {escape(exc.message)}"
    if not removed or participant is None:
        return f"Participant #{participant_id} not found."
    return f"🗑 Removed {escape(participant.name)}"


@participants_router.message(Command("deluser"))
async def cmd_deluser(message: Message) -> None:
    try:
        participant_id = parse_id(command_args(message.text))
    except LedgerError:
        await message.answer("Usage: /deluser &lt;id&gt;")
        return
    await message.answer(await _remove_participant(message.chat.id, participant_id))


@participants_router.callback_query(F.data.startswith("deluser:"))
async def cb_deluser(callback: CallbackQuery) -> None:
    if callback.message is None or not callback.data:
        await callback.answer()
        return
    participant_id = int(callback.data.split(":", 1)[1])
    text = await _remove_participant(callback.message.chat.id, participant_id)
    await callback.message.answer(text)
    await callback.answer()
