# movie_bot/__main__.py

import re

import uvicorn
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
)

from movie_bot.config import AppConfig, get_configuration, logger
from movie_bot.handlers.command_handlers import COMMAND_TABLE
from movie_bot.handlers.error_handler import global_error_handler
from movie_bot.handlers.message_handlers import handle_text_message
from movie_bot.state import APP_CONTEXT_KEY, AppContext, build_app_context
from movie_bot.web.app import create_app


def register_handlers(application: Application) -> None:
    """
    Registers every trigger from COMMAND_TABLE, the free-text fallback and
    the global error handler.
    """
    for name, callback in COMMAND_TABLE.items():
        # "/random" arrives as a bot command; "random" or "/Random" as text.
        application.add_handler(CommandHandler(name, callback))
        application.add_handler(
            MessageHandler(
                filters.Regex(re.compile(rf"^/?{name}$", re.IGNORECASE))
                & ~filters.COMMAND,
                callback,
            )
        )

    # Added last: anything unmatched, unknown commands included.
    application.add_handler(
        MessageHandler(filters.TEXT, handle_text_message)
    )

    application.add_error_handler(global_error_handler)

    logger.info("All handlers have been registered.")


def build_application(config: AppConfig, app_context: AppContext) -> Application:
    """Builds the PTB application and links it with the shared AppContext."""
    builder = ApplicationBuilder().token(config.bot_token)
    if config.mode == "webhook":
        # Updates arrive through the FastAPI route instead of an Updater.
        builder = builder.updater(None)
    application = builder.build()

    application.bot_data[APP_CONTEXT_KEY] = app_context
    app_context.application = application

    register_handlers(application)
    return application


def main() -> None:
    """
    Main function: loads config, wires the bot and the HTTP app together
    and serves both from one uvicorn process.
    """
    logger.info("Starting bot...")

    config = get_configuration()
    app_context = build_app_context(config)
    build_application(config, app_context)
    web_app = create_app(app_context)

    logger.info(f"Server is running on http://{config.host}:{config.port}")
    uvicorn.run(web_app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
