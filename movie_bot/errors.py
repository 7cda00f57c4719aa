# movie_bot/errors.py


class MovieBotError(Exception):
    """Base class for errors raised by the bot's own services."""


class StoreUnavailable(MovieBotError):
    """The document store could not be reached or rejected the query."""


class TransportFault(MovieBotError):
    """A reply could not be delivered through the chat transport."""
