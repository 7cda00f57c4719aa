# movie_bot/ui/views.py

from collections.abc import Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .messages import LinkButton


def build_link_keyboard(buttons: Sequence[LinkButton]) -> InlineKeyboardMarkup | None:
    """
    Lays out URL buttons on a single row, in the given order.
    Returns None when there is nothing to show so no empty keyboard is sent.
    """
    if not buttons:
        return None

    row = [InlineKeyboardButton(button.label, url=button.url) for button in buttons]
    return InlineKeyboardMarkup([row])
