from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from fairshare.db.models import Participant, Payment


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="🏠 Dashboard", callback_data="menu:dashboard"),
                InlineKeyboardButton(text="👥 Friends", callback_data="menu:users"),
            ],
            [
                InlineKeyboardButton(text="💸 Payments", callback_data="menu:payments"),
                InlineKeyboardButton(text="🤝 Settlements", callback_data="menu:settle"),
            ],
            [InlineKeyboardButton(text="📊 Reports", callback_data="menu:report")],
        ]
    )


def participants_keyboard(participants: Sequence[Participant]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(text=f"🗑 {participant.name}", callback_data=f"deluser:{participant.id}")]
        for participant in participants
    ]
    return InlineKeyboardMarkup(inline_keyboard=rows)


def payments_keyboard(payments: Sequence[Payment]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(text=f"🗑 #{payment.id} {payment.purpose}", callback_data=f"delpay:{payment.id}")]
        for payment in payments
    ]
    return InlineKeyboardMarkup(inline_keyboard=rows)


def clear_confirm_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="Yes, clear everything", callback_data="clear:yes"),
                InlineKeyboardButton(text="Cancel", callback_data="clear:no"),
            ]
        ]
    )
