# movie_bot/handlers/message_handlers.py

from telegram import Message, Update
from telegram.ext import ContextTypes

from ..config import logger
from ..services.transport import ChatTransport
from ..ui.messages import FALLBACK_TEXT


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Answers any text that is not a known command with a short prompt."""
    user = update.effective_user
    message = update.message
    chat = update.effective_chat
    if not chat or not isinstance(message, Message) or not message.text:
        logger.warning("handle_text_message: Update received without a chat or valid message text. Ignoring.")
        return

    logger.info(f"Received free text from user {user.id if user else 'unknown'}.")
    await ChatTransport(context.bot, chat.id).send_text(FALLBACK_TEXT)
