# movie_bot/state.py

from dataclasses import dataclass
from typing import Any

from telegram.ext import Application

from .config import BOT_WEBHOOK_PATH, AppConfig, logger
from .services.movie_store import MovieStore

APP_CONTEXT_KEY = "APP_CONTEXT"


@dataclass
class AppContext:
    """
    Process-wide handles shared by the chat handlers and the HTTP routes.
    Built once in main() and torn down on shutdown.
    """

    config: AppConfig
    store: MovieStore
    application: Application | None = None


def build_app_context(config: AppConfig) -> AppContext:
    """Creates the (not yet connected) store and wraps it with the config."""
    store = MovieStore(
        config.mongo["url"],
        config.mongo["database"],
        config.mongo["collection"],
        timeout_ms=int(config.mongo.get("timeout_ms", "5000")),
    )
    return AppContext(config=config, store=store)


def get_app_context(bot_data: dict[str, Any]) -> AppContext:
    """Fetches the AppContext stored in PTB's bot_data."""
    app_context = bot_data.get(APP_CONTEXT_KEY)
    if not isinstance(app_context, AppContext):
        raise RuntimeError("AppContext is missing from bot_data.")
    return app_context


async def post_init(app_context: AppContext) -> None:
    """
    Connects the store, then starts the bot application and begins
    receiving updates (polling or webhook, depending on the config).
    """
    logger.info("--- Starting up: connecting store and bot ---")
    await app_context.store.connect()

    application = app_context.application
    if application is None:
        logger.info("No bot application attached. Serving HTTP only.")
        return

    await application.initialize()
    await application.start()

    config = app_context.config
    if config.mode == "webhook":
        webhook_url = f"{config.webhook_url}{BOT_WEBHOOK_PATH}"
        await application.bot.set_webhook(url=webhook_url)
        logger.info(f"Telegram webhook registered at {webhook_url}.")
    elif application.updater is not None:
        await application.updater.start_polling()
        logger.info("Telegram bot started polling.")

    logger.info("--- Startup complete ---")


async def post_shutdown(app_context: AppContext) -> None:
    """Stops the bot application (if running) and closes the store."""
    logger.info("--- Shutting down: stopping bot and closing store ---")

    application = app_context.application
    if application is not None:
        if application.updater is not None and application.updater.running:
            await application.updater.stop()
        if application.running:
            await application.stop()
        await application.shutdown()

    await app_context.store.close()
    logger.info("--- Shutdown complete ---")
