"""Film and series records, creation defaults, and coercion of remote rows."""
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, List, Mapping

FILMS = "films"
SERIES = "series"
COLLECTIONS = (FILMS, SERIES)

FILM_POSTER_URL = "https://images.pexels.com/photos/1117132/pexels-photo-1117132.jpeg"
FILM_BACKDROP_URL = "https://images.pexels.com/photos/2873486/pexels-photo-2873486.jpeg"
SERIES_POSTER_URL = "https://images.pexels.com/photos/1770809/pexels-photo-1770809.jpeg"
SERIES_BACKDROP_URL = "https://images.pexels.com/photos/3052361/pexels-photo-3052361.jpeg"

_TEXT_FIELDS = ("title", "description", "poster_url", "backdrop_url", "iframe_url")


class MalformedRecord(ValueError):
    """A row from the remote store that cannot be turned into a record."""


def parse_genre(text: str) -> List[str]:
    """Split a comma separated genre string into trimmed tags.

    Empty or whitespace-only input gives an empty list.
    """
    if not text or not text.strip():
        return []
    return [g.strip() for g in text.split(",")]


def format_genre(genre: List[str]) -> str:
    """Join genre tags for display in a single text input."""
    return ", ".join(genre)


def _coerce_text(value: Any) -> str:
    return "" if value is None else str(value)


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _coerce_genre(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return parse_genre(value)
    if isinstance(value, (list, tuple)):
        return [_coerce_text(g) for g in value]
    raise MalformedRecord(f"genre must be a list, got {type(value).__name__}")


def _common_fields(row: Any) -> dict:
    """Validate the fields films and series share."""
    if not isinstance(row, Mapping):
        raise MalformedRecord(f"expected a mapping, got {type(row).__name__}")
    record_id = row.get("id")
    if record_id is None or str(record_id) == "":
        raise MalformedRecord("record has no id")
    out = {"id": str(record_id), "genre": _coerce_genre(row.get("genre"))}
    for name in _TEXT_FIELDS:
        out[name] = _coerce_text(row.get(name))
    return out


@dataclass
class Film:
    """Editable film record, keyed by id in the films collection."""
    id: str
    title: str
    description: str
    release_year: int
    poster_url: str
    backdrop_url: str
    iframe_url: str
    genre: List[str] = field(default_factory=list)

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "Film":
        """Build a Film from a store row, repairing missing or mistyped fields."""
        fields = _common_fields(row)
        fields["release_year"] = _coerce_int(row.get("release_year"), datetime.now().year)
        return cls(**fields)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Series:
    """Editable series record, keyed by id in the series collection."""
    id: str
    title: str
    description: str
    seasons: int
    poster_url: str
    backdrop_url: str
    iframe_url: str
    genre: List[str] = field(default_factory=list)

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "Series":
        """Build a Series from a store row, repairing missing or mistyped fields."""
        fields = _common_fields(row)
        fields["seasons"] = _coerce_int(row.get("seasons"), 1)
        return cls(**fields)

    def to_dict(self) -> dict:
        return asdict(self)


def new_film() -> Film:
    """Fresh film with a new id and placeholder values."""
    return Film(
        id=str(uuid.uuid4()),
        title="New Film",
        description="",
        release_year=datetime.now().year,
        poster_url=FILM_POSTER_URL,
        backdrop_url=FILM_BACKDROP_URL,
        iframe_url="",
        genre=[],
    )


def new_series() -> Series:
    """Fresh series with a new id and placeholder values."""
    return Series(
        id=str(uuid.uuid4()),
        title="New Series",
        description="",
        seasons=1,
        poster_url=SERIES_POSTER_URL,
        backdrop_url=SERIES_BACKDROP_URL,
        iframe_url="",
        genre=[],
    )
