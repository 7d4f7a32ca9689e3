from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from fairshare.keyboards import main_menu_keyboard
from fairshare.utils.parse import PAY_USAGE

basic_router = Router()

HELP_TEXT = (
    "<b>📖 Commands</b>\n\n"
    "<b>Friends:</b>\n"
    "/adduser &lt;name&gt; - add a participant\n"
    "/users - list participants\n"
    "/deluser &lt;id&gt; - remove a settled participant\n\n"
    "<b>Payments:</b>\n"
    f"{PAY_USAGE.replace('<', '&lt;').replace('>', '&gt;')}\n"
    "/payments - list payments\n"
    "/delpay &lt;id&gt; - delete a payment\n"
    "/search &lt;term&gt; - search by purpose or category\n\n"
    "<b>Settling up:</b>\n"
    "/balances - who owes what\n"
    "/settle - suggested transfers\n"
    "/report - totals by category and payer\n"
    "/dashboard - overview\n"
    "/export - download payments as CSV\n"
    "/clear - wipe this chat's ledger\n\n"
    "Categories: Food, Stay, Entertainment, Shopping, Settlement, Travel, General"
)


@basic_router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    user_name = message.from_user.first_name if message.from_user else "friend"
    await message.answer(
        f"👋 Hi, {user_name}!\n\n"
        "I'm <b>FairShare</b>: I keep track of shared expenses in this chat "
        "and work out who should pay whom.\n\n"
        "Pick a section or send /help:",
        reply_markup=main_menu_keyboard(),
    )


@basic_router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT)
