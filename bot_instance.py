"""
Admin notification bot.

The payment service never handles Telegram updates; it only sends admins a
message when a manual queue entry is paid. One Bot (and one HTTP session)
is shared by every payment session in the process.

Without a TOKEN there is no bot and notifications are skipped.
"""

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

import config

_bot_instance = None


def get_bot() -> Bot | None:
    global _bot_instance
    if _bot_instance is None and config.TOKEN:
        _bot_instance = Bot(
            token=config.TOKEN,
            default=DefaultBotProperties(parse_mode=ParseMode.HTML)
        )
    return _bot_instance


async def close_bot():
    """Close the bot's HTTP session on shutdown."""
    global _bot_instance
    if _bot_instance is not None:
        await _bot_instance.session.close()
        _bot_instance = None
