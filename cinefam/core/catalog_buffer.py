"""In-memory edit buffer for the films and series collections."""
import asyncio
import logging
from typing import Callable, List, Optional, Tuple, TypeVar

from cinefam.core.catalog_store import RemoteCatalogStore
from cinefam.models.catalog import FILMS, SERIES, Film, MalformedRecord, Series, new_film, new_series

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load data. Please try again."

R = TypeVar("R", Film, Series)


def get_by_id(records: List[R], record_id: str) -> Optional[R]:
    """Return the record with this id or None."""
    for r in records:
        if r.id == record_id:
            return r
    return None


def replace_by_id(records: List[R], record: R) -> bool:
    """Replace the entry with record.id in place. Returns True if found."""
    for i, r in enumerate(records):
        if r.id == record.id:
            records[i] = record
            return True
    return False


def remove_by_id(records: List[R], record_id: str) -> bool:
    """Remove the entry with this id. Returns True if found and removed."""
    for i, r in enumerate(records):
        if r.id == record_id:
            records.pop(i)
            return True
    return False


def _coerce_rows(collection: str, rows: list, from_remote: Callable[[dict], R]) -> List[R]:
    out = []
    for row in rows:
        try:
            out.append(from_remote(row))
        except MalformedRecord as e:
            logger.warning("Dropping malformed %s row: %s", collection, e)
    return out


class CatalogBuffer:
    """Working copy of both collections, edited locally until saved."""

    def __init__(self, store: RemoteCatalogStore) -> None:
        self._store = store
        self.films: List[Film] = []
        self.series: List[Series] = []
        self.error_message = ""

    async def load(self) -> Tuple[List[Film], List[Series]]:
        """Read both collections concurrently; a failed one keeps its previous value."""
        films_rows, series_rows = await asyncio.gather(
            self._store.read_all(FILMS),
            self._store.read_all(SERIES),
            return_exceptions=True,
        )
        failed = False
        if isinstance(films_rows, BaseException):
            logger.warning("Loading films failed: %s", films_rows)
            failed = True
        else:
            self.films = _coerce_rows(FILMS, films_rows, Film.from_remote)
        if isinstance(series_rows, BaseException):
            logger.warning("Loading series failed: %s", series_rows)
            failed = True
        else:
            self.series = _coerce_rows(SERIES, series_rows, Series.from_remote)
        self.error_message = LOAD_FAILED_MESSAGE if failed else ""
        logger.info("Catalog loaded: %d films, %d series", len(self.films), len(self.series))
        return self.films, self.series

    def get_film(self, film_id: str) -> Optional[Film]:
        return get_by_id(self.films, film_id)

    def get_series(self, series_id: str) -> Optional[Series]:
        return get_by_id(self.series, series_id)

    def add_film(self) -> Film:
        film = new_film()
        self.films.append(film)
        return film

    def add_series(self) -> Series:
        show = new_series()
        self.series.append(show)
        return show

    def update_film(self, film: Film) -> bool:
        """Replace the film with the same id in full; unknown ids are ignored."""
        return replace_by_id(self.films, film)

    def update_series(self, show: Series) -> bool:
        """Replace the series with the same id in full; unknown ids are ignored."""
        return replace_by_id(self.series, show)

    def delete_film(self, film_id: str) -> bool:
        return remove_by_id(self.films, film_id)

    def delete_series(self, series_id: str) -> bool:
        return remove_by_id(self.series, series_id)
