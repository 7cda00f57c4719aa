# movie_bot/handlers/error_handler.py

import json

from telegram import Update
from telegram.ext import ContextTypes

from ..config import logger

ERROR_REPLY_TEXT = (
    "❌ An unexpected error occurred.\n\n"
    "The issue has been logged. Please try again later."
)


async def global_error_handler(
    update: object, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Catches all unhandled exceptions from handlers, logs them with the
    update that caused them, and tells the user something went wrong
    without exposing any details.
    """
    if not context.error:
        logger.warning("Error handler was called but context.error is None.")
        return

    logger.error("An unhandled exception occurred:", exc_info=context.error)

    update_str = update.to_dict() if isinstance(update, Update) else str(update)
    context_message = (
        f"update = {json.dumps(update_str, indent=2, ensure_ascii=False, default=str)}\n"
        f"context.chat_data = {context.chat_data}\n"
        f"context.user_data = {context.user_data}"
    )
    logger.error(f"DETAILED EXCEPTION REPORT:\n{context_message}")

    # No parse_mode: plain text only.
    if isinstance(update, Update) and update.effective_message:
        try:
            await update.effective_message.reply_text(text=ERROR_REPLY_TEXT)
        except Exception as e:
            logger.error(f"Failed to send the user-facing error message: {e}")
