# movie_bot/ui/messages.py

from __future__ import annotations

import html
from dataclasses import dataclass

from telegram.constants import ParseMode

from ..models import MovieRecord

CAPTION_PARSE_MODE = ParseMode.HTML
RANDOM_FAILURE_TEXT = "An error occurred while processing your request."
FALLBACK_TEXT = "How can I help?"


@dataclass(frozen=True)
class LinkButton:
    """A button that opens `url` when pressed."""

    label: str
    url: str


@dataclass(frozen=True)
class FormattedMovie:
    caption: str
    image_ref: str
    buttons: list[LinkButton]


def format_caption(record: MovieRecord) -> str:
    """
    Builds the HTML caption shown under the movie poster.

    Field order is title, summary, year, rating, genres. Store values are
    escaped so they cannot break Telegram's HTML parsing.
    """
    title = html.escape(record.title)
    summary = html.escape(record.summary)
    year = html.escape(record.year)
    rating = html.escape(record.rating)
    genres = html.escape(", ".join(record.genres))

    caption = f"<b>{title}</b>\n\n"
    caption += f"<i><b>Summary:</b></i> {summary}\n\n"
    caption += f"<i>Year:</i> <b>{year}</b>\n"
    caption += f"<i>Rating:</i> <b>{rating}</b>\n"
    caption += f"<i>Genres:</i> <b>{genres}</b>\n"
    return caption


def format_for_display(record: MovieRecord) -> FormattedMovie:
    """Turns a movie into a caption, a poster reference and its download buttons."""
    buttons = [
        LinkButton(label=option.quality, url=option.link)
        for option in record.download_options
    ]
    return FormattedMovie(
        caption=format_caption(record),
        image_ref=record.image_url,
        buttons=buttons,
    )
