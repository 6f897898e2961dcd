"""Record editors: field edits -> whole-record replacements, and the HTML form groups."""
import dataclasses
import re
from html import escape
from typing import Generic, List, TypeVar

from cinefam.models.catalog import FILMS, SERIES, Film, Series, format_genre, parse_genre

R = TypeVar("R", Film, Series)

TEXT_FIELDS = ("title", "description", "poster_url", "backdrop_url", "iframe_url")

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


class InvalidFieldValue(ValueError):
    """An edit that cannot be applied; the buffer stays unchanged."""


def parse_int_field(text: str) -> int:
    """Strict integer parse: anything but an optionally signed whole number is rejected."""
    stripped = str(text).strip()
    if not _INT_RE.match(stripped):
        raise InvalidFieldValue(f"Not a whole number: {text!r}")
    return int(stripped)


class RecordEditor(Generic[R]):
    """Shared form logic; subclasses name the collection and its numeric field."""

    collection: str = ""
    numeric_field: str = ""
    numeric_label: str = ""

    def apply_change(self, record: R, field: str, raw_value: str) -> R:
        """Return a new record with one field replaced from its input text."""
        if field in TEXT_FIELDS:
            value = "" if raw_value is None else str(raw_value)
        elif field == self.numeric_field:
            value = parse_int_field(raw_value)
        elif field == "genre":
            value = parse_genre("" if raw_value is None else str(raw_value))
        else:
            raise InvalidFieldValue(f"Field {field!r} is not editable")
        return dataclasses.replace(record, **{field: value})

    def _input(self, field: str, label: str, value, input_type: str = "text") -> str:
        return (
            f'<div class="field"><label>{escape(label)}</label>'
            f'<input type="{input_type}" data-field="{field}" value="{escape(str(value))}"></div>'
        )

    def render_one(self, record: R) -> str:
        rid = escape(record.id)
        title = escape(record.title)
        parts = [
            f'<div class="record" data-collection="{self.collection}" data-id="{rid}">',
            '<div class="actions"><button class="delete" data-action="delete">Delete</button></div>',
            '<div class="media">',
            self._input("poster_url", "Poster URL", record.poster_url),
            f'<img class="poster" src="{escape(record.poster_url)}" alt="{title}">',
            self._input("backdrop_url", "Backdrop URL", record.backdrop_url),
            f'<img class="backdrop" src="{escape(record.backdrop_url)}" alt="{title} backdrop">',
            "</div>",
            '<div class="details">',
            self._input("title", "Title", record.title),
            '<div class="field"><label>Description</label>'
            f'<textarea data-field="description" rows="3">{escape(record.description)}</textarea></div>',
            self._input(
                self.numeric_field,
                self.numeric_label,
                getattr(record, self.numeric_field),
                input_type="number",
            ),
            self._input("genre", "Genres (comma separated)", format_genre(record.genre)),
            self._input("iframe_url", "Iframe URL (for trailers/videos)", record.iframe_url),
        ]
        if record.iframe_url:
            parts.append(
                f'<div class="preview"><iframe src="{escape(record.iframe_url)}" '
                f'allowfullscreen title="{title} trailer"></iframe></div>'
            )
        parts.append("</div></div>")
        return "".join(parts)

    def render(self, records: List[R]) -> str:
        """One form group per record, in buffer order."""
        return '<div class="editor">' + "".join(self.render_one(r) for r in records) + "</div>"


class FilmEditor(RecordEditor[Film]):
    collection = FILMS
    numeric_field = "release_year"
    numeric_label = "Release Year"


class SeriesEditor(RecordEditor[Series]):
    collection = SERIES
    numeric_field = "seasons"
    numeric_label = "Seasons"
