"""Catalog edit buffer endpoints: list, add, replace, field edits, delete, save."""
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from cinefam.api.state import AppState, require_session
from cinefam.core.editors import InvalidFieldValue
from cinefam.models.catalog import Film, Series

router = APIRouter()


class FilmBody(BaseModel):
    title: str
    description: str = ""
    release_year: int
    poster_url: str = ""
    backdrop_url: str = ""
    iframe_url: str = ""
    genre: List[str] = Field(default_factory=list)


class SeriesBody(BaseModel):
    title: str
    description: str = ""
    seasons: int
    poster_url: str = ""
    backdrop_url: str = ""
    iframe_url: str = ""
    genre: List[str] = Field(default_factory=list)


class FieldBody(BaseModel):
    """Raw text of one form input."""
    value: str = ""


def _catalog_to_dict(state: AppState) -> dict:
    return {
        "films": [asdict(f) for f in state.buffer.films],
        "series": [asdict(s) for s in state.buffer.series],
        "error": state.buffer.error_message,
        "save": state.saver.status(),
    }


@router.get("/catalog")
def get_catalog(state: AppState = Depends(require_session)):
    """Return both collections as currently held in the buffer."""
    return _catalog_to_dict(state)


@router.post("/catalog/reload")
async def reload_catalog(state: AppState = Depends(require_session)):
    """Read both collections again from the remote store (unsaved edits are replaced)."""
    await state.buffer.load()
    return _catalog_to_dict(state)


@router.post("/catalog/save")
async def save_catalog(state: AppState = Depends(require_session)):
    """Upsert every buffered record. Deleted records are not removed remotely."""
    if state.saver.saving:
        raise HTTPException(status_code=409, detail="A save is already in progress.")
    result = await state.save()
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.message)
    return {"ok": True, "upserts": result.upserts, "save": state.saver.status()}


@router.get("/catalog/save-status")
def save_status(state: AppState = Depends(require_session)):
    return state.saver.status()


# Films


@router.post("/films", status_code=201)
async def add_film(state: AppState = Depends(require_session)):
    return asdict(state.buffer.add_film())


@router.put("/films/{film_id}")
async def replace_film(film_id: str, body: FilmBody, state: AppState = Depends(require_session)):
    """Replace a film in full."""
    film = Film(id=film_id, **body.model_dump())
    if not state.buffer.update_film(film):
        raise HTTPException(status_code=404, detail="Film not found")
    return asdict(film)


@router.patch("/films/{film_id}/fields/{field}")
async def edit_film_field(
    film_id: str,
    field: str,
    body: FieldBody,
    state: AppState = Depends(require_session),
):
    """Apply one form input to a film; the whole record is replaced."""
    existing = state.buffer.get_film(film_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Film not found")
    try:
        film = state.film_editor.apply_change(existing, field, body.value)
    except InvalidFieldValue as e:
        raise HTTPException(status_code=422, detail=str(e))
    state.buffer.update_film(film)
    return asdict(film)


@router.delete("/films/{film_id}", status_code=204)
async def delete_film(film_id: str, state: AppState = Depends(require_session)):
    """Remove a film from the buffer only."""
    state.buffer.delete_film(film_id)
    return Response(status_code=204)


# Series


@router.post("/series", status_code=201)
async def add_series(state: AppState = Depends(require_session)):
    return asdict(state.buffer.add_series())


@router.put("/series/{series_id}")
async def replace_series(series_id: str, body: SeriesBody, state: AppState = Depends(require_session)):
    """Replace a series in full."""
    show = Series(id=series_id, **body.model_dump())
    if not state.buffer.update_series(show):
        raise HTTPException(status_code=404, detail="Series not found")
    return asdict(show)


@router.patch("/series/{series_id}/fields/{field}")
async def edit_series_field(
    series_id: str,
    field: str,
    body: FieldBody,
    state: AppState = Depends(require_session),
):
    """Apply one form input to a series; the whole record is replaced."""
    existing = state.buffer.get_series(series_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Series not found")
    try:
        show = state.series_editor.apply_change(existing, field, body.value)
    except InvalidFieldValue as e:
        raise HTTPException(status_code=422, detail=str(e))
    state.buffer.update_series(show)
    return asdict(show)


@router.delete("/series/{series_id}", status_code=204)
async def delete_series(series_id: str, state: AppState = Depends(require_session)):
    """Remove a series from the buffer only."""
    state.buffer.delete_series(series_id)
    return Response(status_code=204)
