import logging

import config
from bot_instance import get_bot
from enums.audience import Audience
from models.order import OrderDTO
from utils.html_escape import safe_html
from utils.localizator import Localizator


class NotificationService:

    @staticmethod
    async def send_to_admins(message: str):
        bot = get_bot()
        if bot is None:
            logging.debug("Admin notification skipped: no bot token configured")
            return
        for admin_id in config.ADMIN_ID_LIST:
            try:
                await bot.send_message(admin_id, f"<b>{message}</b>")
            except Exception as e:
                logging.error(e)

    @staticmethod
    async def manual_payment_received(order: OrderDTO):
        """Tell admins a manual queue entry is paid and waiting for them."""
        if not config.NOTIFY_ADMINS_MANUAL_PAYMENT:
            return
        amount = order.display_amount
        message = Localizator.get_text(Audience.ADMIN, "manual_payment_received").format(
            order_id=safe_html(order.id),
            currency_symbol=Localizator.get_currency_symbol(),
            amount=amount if amount is not None else "—"
        )
        await NotificationService.send_to_admins(message)
