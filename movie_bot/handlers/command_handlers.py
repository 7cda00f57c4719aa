# movie_bot/handlers/command_handlers.py

from collections.abc import Awaitable, Callable

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ..config import logger
from ..errors import MovieBotError, TransportFault
from ..services.selector import select_random_candidate
from ..services.transport import ChatTransport
from ..state import get_app_context
from ..ui.messages import (
    CAPTION_PARSE_MODE,
    RANDOM_FAILURE_TEXT,
    LinkButton,
    format_for_display,
)

CommandCallback = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]


def get_help_message_text() -> str:
    """Returns the formatted help message string."""
    return (
        "Here are the available commands:\n\n"
        "<code>/random</code> - Get a random well-rated movie.\n"
        "<code>/watch</code>  - Open the online player.\n"
        "<code>/help</code>   - Display this message.\n"
        "<code>/start</code>  - Show the welcome message."
    )


def _transport_for(update: Update, context: ContextTypes.DEFAULT_TYPE) -> ChatTransport | None:
    chat = update.effective_chat
    if not chat:
        return None
    return ChatTransport(context.bot, chat.id)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Greets the user with the configured welcome text."""
    transport = _transport_for(update, context)
    if not transport:
        logger.warning("start_command was triggered but could not find an effective_chat.")
        return

    app_context = get_app_context(context.bot_data)
    await transport.send_text(app_context.config.welcome_text)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends a formatted list of available commands."""
    chat = update.effective_chat
    if not chat:
        logger.warning("help_command was triggered but could not find an effective_chat.")
        return

    await context.bot.send_message(
        chat_id=chat.id,
        text=get_help_message_text(),
        parse_mode=ParseMode.HTML,
    )


async def random_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Picks a random movie matching the configured rating/year floor and sends
    its poster, caption and download buttons. Any failure, including "no
    match", ends in the same apology message; the cause only goes to the log.
    """
    transport = _transport_for(update, context)
    if not transport:
        logger.warning("random_command was triggered but could not find an effective_chat.")
        return

    app_context = get_app_context(context.bot_data)
    config = app_context.config

    user = update.effective_user
    logger.info(f"User {user.id if user else 'unknown'} requested a random movie.")

    try:
        record = await select_random_candidate(
            app_context.store, config.min_rating, config.min_year
        )
        if record is None:
            logger.info(f"No candidate movie for chat {transport.chat_id}.")
            await transport.send_text(RANDOM_FAILURE_TEXT)
            return

        formatted = format_for_display(record)
        await transport.send_photo(
            formatted.image_ref,
            formatted.caption,
            CAPTION_PARSE_MODE,
            formatted.buttons,
        )
    except MovieBotError as e:
        logger.error(f"random_command failed for chat {transport.chat_id}: {e}")
        try:
            await transport.send_text(RANDOM_FAILURE_TEXT)
        except TransportFault:
            logger.error("Could not deliver the failure message either.")


async def watch_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends a single button linking to the configured watch page."""
    transport = _transport_for(update, context)
    if not transport:
        logger.warning("watch_command was triggered but could not find an effective_chat.")
        return

    config = get_app_context(context.bot_data).config
    if not config.watch_url:
        await transport.send_text("No watch page is configured.")
        return

    await transport.send_button_message(
        "Click the button below to start watching:",
        [LinkButton(label=config.watch_label, url=config.watch_url)],
    )


# Trigger name -> handler. Registered in one loop by __main__.register_handlers.
COMMAND_TABLE: dict[str, CommandCallback] = {
    "start": start_command,
    "help": help_command,
    "random": random_command,
    "watch": watch_command,
}
