import os
import random
import sys
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

# Set PTB timedelta before importing telegram types; keep imports at top via noqa
os.environ.setdefault("PTB_TIMEDELTA", "1")
from telegram import Bot, Chat, Message, Update, User  # noqa: E402

# Ensure root path is available for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from movie_bot.config import AppConfig  # noqa: E402
from movie_bot.errors import StoreUnavailable  # noqa: E402
from movie_bot.state import APP_CONTEXT_KEY, AppContext  # noqa: E402


class FakeMovieStore:
    """
    In-memory stand-in for MovieStore. Understands the `{field: {"$gte": v}}`
    filters the selector builds, compared as strings like MongoDB does.
    """

    def __init__(self, documents: list[dict[str, Any]] | None = None, *, seed: int = 0):
        self.documents = list(documents or [])
        self.rng = random.Random(seed)
        self.fail_with: Exception | None = None
        self.connect = AsyncMock()
        self.close = AsyncMock()
        self.filters_seen: list[dict[str, Any]] = []

    def _matches(self, document: dict[str, Any], filter: dict[str, Any]) -> bool:
        for field, condition in filter.items():
            value = document.get(field)
            if value is None:
                return False
            if "$gte" in condition and not value >= condition["$gte"]:
                return False
        return True

    async def query(self, filter: dict[str, Any], limit: int | None = None):
        if self.fail_with:
            raise self.fail_with
        matching = [d for d in self.documents if self._matches(d, filter)]
        return matching[:limit] if limit is not None else matching

    async def sample_one(self, filter: dict[str, Any]):
        self.filters_seen.append(filter)
        if self.fail_with:
            raise self.fail_with
        matching = [d for d in self.documents if self._matches(d, filter)]
        return self.rng.choice(matching) if matching else None


def movie_document(**overrides: Any) -> dict[str, Any]:
    document = {
        "title": "X",
        "summary": "A movie.",
        "rating": "8",
        "year": "2010",
        "genres": ["Action", "Drama"],
        "imageUrl": "http://img/x.jpg",
        "download": [{"quality": "HD", "link": "http://a"}],
    }
    document.update(overrides)
    return document


@pytest.fixture
def make_movie():
    return movie_document


@pytest.fixture
def make_store():
    def _make(documents: list[dict[str, Any]] | None = None, **kwargs: Any):
        return FakeMovieStore(documents, **kwargs)

    return _make


@pytest.fixture
def failing_store():
    store = FakeMovieStore([movie_document()])
    store.fail_with = StoreUnavailable("connection refused")
    return store


@pytest.fixture
def app_config():
    return AppConfig(
        bot_token="TEST_TOKEN",
        mode="polling",
        webhook_url="",
        mongo={
            "url": "mongodb://localhost:27017",
            "database": "movies",
            "collection": "movies",
            "timeout_ms": "5000",
        },
        host="127.0.0.1",
        port=6782,
        min_rating="7",
        min_year="2005",
        welcome_text="Welcome!",
        watch_url="https://example.com/watch",
        watch_label="Watch now",
    )


@pytest.fixture
def app_context(app_config, make_store):
    return AppContext(config=app_config, store=make_store([movie_document()]))


@pytest.fixture
def user():
    return User(id=123, first_name="Test", is_bot=False)


@pytest.fixture
def chat():
    return Chat(id=456, type="private")


@pytest.fixture
def make_message(user, chat):
    def _make(text: str = "", message_id: int = 1):
        msg = Message(
            message_id=message_id,
            date=datetime.now(),
            chat=chat,
            from_user=user,
            text=text,
        )
        bot = Mock(spec=Bot)
        bot.send_message = AsyncMock()
        msg.set_bot(bot)
        return msg

    return _make


@pytest.fixture
def make_update():
    def _make(message: Message | None = None, update_id: int = 1):
        return Update(update_id=update_id, message=message)

    return _make


@pytest.fixture
def context(make_message, app_context):
    bot = SimpleNamespace(
        send_message=AsyncMock(return_value=make_message()),
        send_photo=AsyncMock(return_value=make_message()),
    )
    return SimpleNamespace(
        bot=bot, user_data={}, chat_data={}, bot_data={APP_CONTEXT_KEY: app_context}
    )
