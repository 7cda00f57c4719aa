# movie_bot/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _text(value: Any) -> str:
    """Stored values are loosely typed; absent fields become empty strings."""
    if value is None:
        return ""
    return str(value)


def _sequence(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        return []
    return list(value)


def _text_list(value: Any) -> list[str]:
    return [_text(item) for item in _sequence(value)]


@dataclass(frozen=True)
class DownloadOption:
    """One download link of a movie, labelled with its quality (e.g. '720p')."""

    quality: str
    link: str

    def to_dict(self) -> dict[str, str]:
        return {"quality": self.quality, "link": self.link}


@dataclass(frozen=True)
class Actor:
    role: str
    name: str


@dataclass(frozen=True)
class MovieRecord:
    """
    Read-only view of a movie document as stored in the `movies` collection.

    `rating` and `year` are kept as the strings the store holds; the candidate
    filter compares them as strings too.
    """

    title: str = ""
    summary: str = ""
    rating: str = ""
    year: str = ""
    genres: list[str] = field(default_factory=list)
    image_url: str = ""
    download_options: list[DownloadOption] = field(default_factory=list)
    url: str = ""
    trailer_link: str = ""
    directors: list[str] = field(default_factory=list)
    actors: list[Actor] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "MovieRecord":
        """Builds a record from a raw store document (camelCase keys)."""
        downloads = _sequence(document.get("download"))
        actors = _sequence(document.get("actors"))
        return cls(
            title=_text(document.get("title")),
            summary=_text(document.get("summary")),
            rating=_text(document.get("rating")),
            year=_text(document.get("year")),
            genres=_text_list(document.get("genres")),
            image_url=_text(document.get("imageUrl")),
            download_options=[
                DownloadOption(
                    quality=_text(item.get("quality")), link=_text(item.get("link"))
                )
                for item in downloads
                if isinstance(item, Mapping)
            ],
            url=_text(document.get("url")),
            trailer_link=_text(document.get("trailerLink")),
            directors=_text_list(document.get("directors")),
            actors=[
                Actor(role=_text(item.get("role")), name=_text(item.get("name")))
                for item in actors
                if isinstance(item, Mapping)
            ],
        )

    def to_response(self) -> dict[str, Any]:
        """The public shape returned by GET /randommovie."""
        return {
            "title": self.title,
            "summary": self.summary,
            "rating": self.rating,
            "year": self.year,
            "genres": list(self.genres),
            "download": [option.to_dict() for option in self.download_options],
            "imageUrl": self.image_url,
        }
