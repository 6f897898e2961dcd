from __future__ import annotations

import json
import time

from conftest import ACCESS_CODE, film_row, series_row


def _login(client) -> None:
    r = client.post("/api/session/login", json={"code": ACCESS_CODE})
    assert r.status_code == 200, r.text


def test_catalog_routes_require_session(client) -> None:
    assert client.get("/api/session").json() == {"authenticated": False}
    assert client.get("/api/catalog").status_code == 401
    assert client.post("/api/films").status_code == 401
    assert client.post("/api/catalog/save").status_code == 401


def test_login_with_wrong_code(client, store) -> None:
    r = client.post("/api/session/login", json={"code": "nope"})

    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid access code. Please try again."
    assert store.auth_calls == []


def test_login_remote_failure(client, store) -> None:
    store.fail_auth = True

    r = client.post("/api/session/login", json={"code": ACCESS_CODE})

    assert r.status_code == 401
    assert r.json()["detail"] == "Authentication failed. Please try again."
    assert client.get("/api/session").json() == {"authenticated": False}


def test_login_loads_catalog(client, store) -> None:
    store.rows["films"] = [film_row("f1")]
    store.rows["series"] = [series_row("s1")]

    r = client.post("/api/session/login", json={"code": ACCESS_CODE})

    assert r.json() == {"ok": True, "films": 1, "series": 1, "error": ""}
    assert sorted(store.read_calls) == ["films", "series"]
    data = client.get("/api/catalog").json()
    assert data["films"][0]["id"] == "f1"
    assert data["series"][0]["seasons"] == 2
    assert data["save"] == {"saving": False, "success": False, "error": ""}


def test_partial_load_failure_is_reported(client, store) -> None:
    store.rows["series"] = [series_row("s1")]
    store.fail_read.add("films")
    _login(client)

    data = client.get("/api/catalog").json()

    assert data["films"] == []
    assert [s["id"] for s in data["series"]] == ["s1"]
    assert data["error"] == "Failed to load data. Please try again."


def test_add_edit_delete_film(client) -> None:
    _login(client)

    film = client.post("/api/films").json()
    assert film["title"] == "New Film"

    r = client.patch(f"/api/films/{film['id']}/fields/genre", json={"value": "Action, Drama"})
    assert r.json()["genre"] == ["Action", "Drama"]

    r = client.patch(f"/api/films/{film['id']}/fields/release_year", json={"value": "abc"})
    assert r.status_code == 422
    films = client.get("/api/catalog").json()["films"]
    assert films[0]["release_year"] == film["release_year"]

    assert client.delete(f"/api/films/{film['id']}").status_code == 204
    assert client.get("/api/catalog").json()["films"] == []
    assert client.delete(f"/api/films/{film['id']}").status_code == 204


def test_replace_series_in_full(client, store) -> None:
    store.rows["series"] = [series_row("s1", genre=["Drama"])]
    _login(client)
    body = {"title": "Renamed", "seasons": 4}

    r = client.put("/api/series/s1", json=body)

    assert r.status_code == 200
    show = client.get("/api/catalog").json()["series"][0]
    assert show["title"] == "Renamed"
    assert show["seasons"] == 4
    assert show["genre"] == []
    assert client.put("/api/series/missing", json=body).status_code == 404


def test_edit_unknown_record_or_field(client, store) -> None:
    store.rows["series"] = [series_row("s1")]
    _login(client)

    assert client.patch("/api/series/nope/fields/title", json={"value": "x"}).status_code == 404
    assert client.patch("/api/series/s1/fields/id", json={"value": "x"}).status_code == 422


def test_save_flushes_buffer(client, store, app_state) -> None:
    store.rows["films"] = [film_row("f1")]
    store.rows["series"] = [series_row("s1")]
    _login(client)
    client.post("/api/series")

    r = client.post("/api/catalog/save")

    assert r.status_code == 200
    assert r.json()["upserts"] == 3
    assert r.json()["save"]["success"] is True
    assert [c for c, _ in store.upsert_calls].count("series") == 2

    time.sleep(app_state.saver.success_clear_sec + 0.2)
    assert client.get("/api/catalog/save-status").json()["success"] is False


def test_save_failure_and_concurrent_save(client, store, app_state) -> None:
    store.rows["films"] = [film_row("f1")]
    store.fail_upsert_ids.add("f1")
    _login(client)

    r = client.post("/api/catalog/save")
    assert r.status_code == 502
    assert "Some records may already have been saved" in r.json()["detail"]

    app_state.saver.saving = True
    assert client.post("/api/catalog/save").status_code == 409


def test_logout_locks_and_clears_flag(client, store, flag_path) -> None:
    _login(client)
    assert json.loads(flag_path.read_text())["authenticated"] is True

    assert client.post("/api/session/logout").json() == {"ok": True}

    assert store.logout_calls == 1
    assert not flag_path.exists()
    assert client.get("/api/catalog").status_code == 401


def test_ui_shows_login_then_editor(client, store) -> None:
    store.rows["films"] = [film_row("f1", title="Heat")]
    store.rows["series"] = [series_row("s1", title="The Wire")]

    page = client.get("/").text
    assert "Access Code" in page
    assert "Heat" not in page

    _login(client)
    page = client.get("/").text
    assert "Edit Films" in page
    assert 'value="Heat"' in page
    assert "Add New Film" in page

    page = client.get("/?tab=series").text
    assert "Edit Series" in page
    assert 'value="The Wire"' in page


def test_restores_session_on_startup(app_state, flag_path, store, monkeypatch) -> None:
    from fastapi.testclient import TestClient

    from cinefam.api import app as app_module

    flag_path.write_text(json.dumps({"authenticated": True, "access_token": "old"}))
    store.rows["films"] = [film_row("f1")]
    monkeypatch.setattr(app_module, "ensure_data_dir", lambda: None)

    with TestClient(app_module.create_app(app_state)) as c:
        assert c.get("/api/session").json() == {"authenticated": True}
        assert [f["id"] for f in c.get("/api/catalog").json()["films"]] == ["f1"]
    assert store.auth_calls == []
