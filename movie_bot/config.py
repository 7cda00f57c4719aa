# movie_bot/config.py

import configparser
import logging
import os
import sys
from dataclasses import dataclass

# --- Constants ---
CONFIG_PATH = "config.ini"
DEFAULT_PORT = 6782
DEFAULT_MIN_RATING = "7"
DEFAULT_MIN_YEAR = "2005"
DEFAULT_WELCOME_TEXT = "Welcome!"
DEFAULT_WATCH_LABEL = "Watch now"
BOT_WEBHOOK_PATH = "/bot"
VALID_MODES = ("polling", "webhook")

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("pymongo").setLevel(logging.WARNING)


@dataclass(frozen=True)
class AppConfig:
    """Everything read from config.ini (and the environment) at startup."""

    bot_token: str
    mode: str
    webhook_url: str
    mongo: dict[str, str]
    host: str
    port: int
    min_rating: str
    min_year: str
    welcome_text: str
    watch_url: str
    watch_label: str


def get_configuration(config_path: str = CONFIG_PATH) -> AppConfig:
    """
    Reads the bot token, Mongo settings, server and selection settings from
    the config.ini file. MONGO_URL, BOT_TOKEN and PORT from the environment
    take precedence over the file.
    """
    if not os.path.exists(config_path):
        logger.critical(
            f"Configuration file '{config_path}' not found. Please create it."
        )
        sys.exit(1)

    config = configparser.ConfigParser()
    with open(config_path, encoding="utf-8") as f:
        config.read_string(f.read())

    token = os.environ.get("BOT_TOKEN") or config.get(
        "telegram", "bot_token", fallback=None
    )
    if not token or token == "PLACE_TOKEN_HERE":
        logger.critical(f"Bot token not found or not set in '{config_path}'.")
        sys.exit(1)

    mode, webhook_url = _load_bot_mode(config)
    mongo_config = _load_mongo_config(config)

    port_str = os.environ.get("PORT") or config.get(
        "server", "port", fallback=str(DEFAULT_PORT)
    )
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid server port: '{port_str}'")

    min_rating = config.get(
        "selection", "min_rating", fallback=DEFAULT_MIN_RATING
    ).strip()
    min_year = config.get("selection", "min_year", fallback=DEFAULT_MIN_YEAR).strip()
    logger.info(
        f"[CONFIG] Candidate filter: rating >= '{min_rating}', year >= '{min_year}'."
    )

    return AppConfig(
        bot_token=token,
        mode=mode,
        webhook_url=webhook_url,
        mongo=mongo_config,
        host=config.get("server", "host", fallback="0.0.0.0"),
        port=port,
        min_rating=min_rating,
        min_year=min_year,
        welcome_text=config.get("bot", "welcome_text", fallback=DEFAULT_WELCOME_TEXT),
        watch_url=config.get("bot", "watch_url", fallback=""),
        watch_label=config.get("bot", "watch_label", fallback=DEFAULT_WATCH_LABEL),
    )


def _load_bot_mode(config: configparser.ConfigParser) -> tuple[str, str]:
    """Resolves how updates reach the bot: long polling or a webhook."""
    mode = config.get("telegram", "mode", fallback="polling").strip().lower()
    if mode not in VALID_MODES:
        raise ValueError(
            f"Invalid bot mode '{mode}'. Expected one of: {', '.join(VALID_MODES)}."
        )

    webhook_url = config.get("telegram", "webhook_url", fallback="").strip()
    if mode == "webhook" and not webhook_url:
        raise ValueError("'webhook_url' is mandatory when mode is 'webhook'.")

    logger.info(f"[CONFIG] Bot will receive updates via {mode}.")
    return mode, webhook_url.rstrip("/")


def _load_mongo_config(config: configparser.ConfigParser) -> dict[str, str]:
    """
    Loads the document store settings. The connection URL is mandatory,
    database and collection names fall back to 'movies'.
    """
    url = os.environ.get("MONGO_URL") or config.get("mongo", "url", fallback=None)
    if not url:
        raise ValueError(
            "'url' in the [mongo] section (or MONGO_URL) is mandatory."
        )

    mongo_config = {
        "url": url.strip(),
        "database": config.get("mongo", "database", fallback="movies").strip(),
        "collection": config.get("mongo", "collection", fallback="movies").strip(),
        "timeout_ms": config.get("mongo", "timeout_ms", fallback="5000").strip(),
    }
    logger.info(
        f"[CONFIG] Using collection '{mongo_config['database']}.{mongo_config['collection']}'."
    )
    return mongo_config
