# movie_bot/services/transport.py

from collections.abc import Sequence

from telegram import Bot, Message
from telegram.error import TelegramError

from ..config import logger
from ..errors import TransportFault
from ..ui.messages import LinkButton
from ..ui.views import build_link_keyboard


class ChatTransport:
    """
    Sends replies to a single chat. Telegram errors surface as TransportFault
    and are never retried.
    """

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self.bot = bot
        self.chat_id = chat_id

    async def send_text(self, text: str) -> Message:
        try:
            return await self.bot.send_message(chat_id=self.chat_id, text=text)
        except TelegramError as e:
            logger.error(f"[TRANSPORT] Failed to send text to chat {self.chat_id}: {e}")
            raise TransportFault(str(e)) from e

    async def send_photo(
        self,
        image_ref: str,
        caption: str,
        parse_mode: str | None,
        buttons: Sequence[LinkButton],
    ) -> Message:
        try:
            return await self.bot.send_photo(
                chat_id=self.chat_id,
                photo=image_ref,
                caption=caption,
                parse_mode=parse_mode,
                reply_markup=build_link_keyboard(buttons),
            )
        except TelegramError as e:
            logger.error(
                f"[TRANSPORT] Failed to send photo to chat {self.chat_id}: {e}"
            )
            raise TransportFault(str(e)) from e

    async def send_button_message(
        self, text: str, buttons: Sequence[LinkButton]
    ) -> Message:
        try:
            return await self.bot.send_message(
                chat_id=self.chat_id,
                text=text,
                reply_markup=build_link_keyboard(buttons),
            )
        except TelegramError as e:
            logger.error(
                f"[TRANSPORT] Failed to send buttons to chat {self.chat_id}: {e}"
            )
            raise TransportFault(str(e)) from e
