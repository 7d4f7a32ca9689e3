from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from fairshare.config import get_settings
from fairshare.db.repo import Database, LedgerRepository
from fairshare.handlers import basic_router, participants_router, payments_router, summary_router
from fairshare.logging import configure_logging, get_logger
from fairshare.services.ledgers import LedgerService, set_global_service


async def main() -> None:
    settings = get_settings()
    configure_logging(logging.getLevelName(settings.log_level.upper()))
    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()
    db = Database(settings.database_url)
    await db.connect()

    set_global_service(LedgerService(LedgerRepository(db), clock=settings.today))

    dp.include_router(basic_router)
    dp.include_router(participants_router)
    dp.include_router(payments_router)
    dp.include_router(summary_router)

    log = get_logger(__name__)
    log.info("bot.start")
    try:
        await dp.start_polling(bot)
    finally:
        await db.close()
        await bot.session.close()
        log.info("bot.stop")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
