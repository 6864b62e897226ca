"""Test the HTTP surface — routing, status codes and error mapping."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, name: str, content: str = "") -> dict:
    resp = await client.post("/api/files", json={"name": name, "content": content})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_initial_snapshot(client: AsyncClient):
    resp = await client.get("/api/files")
    assert resp.status_code == 200
    data = resp.json()
    assert data["current_index"] == 0
    assert [f["name"] for f in data["files"]] == ["index.html"]
    assert data["files"][0]["type"] == "html"


@pytest.mark.asyncio
async def test_create_and_get_current(client: AsyncClient):
    created = await _create(client, "app.js", "run()")
    resp = await client.get("/api/files/current")
    assert resp.json()["id"] == created["id"]
    assert resp.json()["type"] == "javascript"


@pytest.mark.asyncio
async def test_duplicate_name_conflict(client: AsyncClient):
    resp = await client.post("/api/files", json={"name": "index.html"})
    assert resp.status_code == 409
    assert "already exists" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_invalid_rename_unprocessable(client: AsyncClient):
    created = await _create(client, "a.txt")
    resp = await client.post(f"/api/files/{created['id']}/rename", json={"new_name": "bad name"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_unknown_file_not_found(client: AsyncClient):
    resp = await client.get("/api/files/file_0_404")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_select_update_and_delete(client: AsyncClient):
    created = await _create(client, "a.txt")
    resp = await client.post("/api/files/current", json={"index": 0})
    assert resp.json()["name"] == "index.html"

    resp = await client.put(f"/api/files/{created['id']}/content", json={"content": "new"})
    assert resp.json()["content"] == "new"

    resp = await client.put("/api/files/current/content", json={"content": "<p>"})
    assert resp.json()["name"] == "index.html"

    resp = await client.delete(f"/api/files/{created['id']}")
    assert resp.json() == {"deleted": created["id"], "current_index": 0}


@pytest.mark.asyncio
async def test_select_requires_exactly_one(client: AsyncClient):
    resp = await client.post("/api/files/current", json={})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_no_current_file(client: AsyncClient):
    snapshot = (await client.get("/api/files")).json()
    await client.delete(f"/api/files/{snapshot['files'][0]['id']}")
    resp = await client.get("/api/files/current")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_move_and_duplicate(client: AsyncClient):
    created = await _create(client, "app.js")
    moved = (await client.post(f"/api/files/{created['id']}/move", json={"target_folder": "src"})).json()
    assert moved["name"] == "src/app.js"
    resp = await client.post(f"/api/files/{created['id']}/duplicate")
    assert resp.status_code == 201
    assert resp.json()["name"] == "src/app_copy.js"


@pytest.mark.asyncio
async def test_folders_and_tree(client: AsyncClient):
    resp = await client.post("/api/folders", json={"name": "assets"})
    assert resp.status_code == 201
    await _create(client, "src/app.js")

    tree = (await client.get("/api/tree")).json()
    assert [f["name"] for f in tree["root_files"]] == ["index.html"]
    assert tree["folders"]["assets"] == []
    assert tree["folders"]["src"][0]["relative_path"] == "app.js"

    tree = (await client.get("/api/tree", params={"include_placeholders": True})).json()
    assert tree["folders"]["assets"][0]["relative_path"] == ".keep"

    resp = await client.post("/api/folders", json={"name": "assets"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_search(client: AsyncClient):
    await _create(client, "src/find.js")
    hits = (await client.get("/api/search", params={"q": "ind"})).json()
    assert [h["file"]["name"] for h in hits] == ["index.html", "src/find.js"]
    assert hits[0]["score"] == 95
    assert (await client.get("/api/search")).json() == []


@pytest.mark.asyncio
async def test_recent(client: AsyncClient):
    created = await _create(client, "a.txt")
    await client.post("/api/files/current", json={"id": created["id"]})
    entries = (await client.get("/api/recent")).json()
    assert entries[0]["id"] == created["id"]
    assert entries[0]["time_ago"] == "just now"
    assert entries[0]["exists"] is True

    await client.delete(f"/api/files/{created['id']}")
    entries = (await client.get("/api/recent")).json()
    assert entries[0]["exists"] is False
    assert entries[0]["name"] == "a.txt"

    assert (await client.delete("/api/recent")).json() == {"cleared": True}
    assert (await client.get("/api/recent")).json() == []


@pytest.mark.asyncio
async def test_tabs(client: AsyncClient):
    created = await _create(client, "a.txt")
    tabs = (await client.get("/api/tabs")).json()
    assert tabs["active_id"] == created["id"]
    assert len(tabs["tabs"]) == 2

    tabs = (await client.delete(f"/api/tabs/{created['id']}")).json()
    assert len(tabs["tabs"]) == 1
    assert tabs["active_index"] == 0

    tabs = (await client.delete("/api/tabs")).json()
    assert tabs == {"tabs": [], "active_index": -1, "active_id": None}
    assert (await client.get("/api/files")).json()["current_index"] == -1


@pytest.mark.asyncio
async def test_upload_file(client: AsyncClient):
    resp = await client.post(
        "/api/upload/file", files={"file": ("notes.md", b"# hi", "text/markdown")}
    )
    assert resp.status_code == 201
    assert resp.json()["name"] == "notes.md"
    assert resp.json()["type"] == "markdown"


@pytest.mark.asyncio
async def test_upload_folder(client: AsyncClient):
    files = [
        ("files", ("site/a.js", b"a()", "text/javascript")),
        ("files", ("site/css/b.css", b"p {}", "text/css")),
        ("files", ("site/logo.png", b"\x89PNG", "image/png")),
    ]
    resp = await client.post("/api/upload/folder", files=files)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["succeeded"] == 2
    assert data["skipped_files"] == ["site/logo.png"]

    names = [f["name"] for f in (await client.get("/api/files")).json()["files"]]
    assert "a.js" in names and "css/b.css" in names


@pytest.mark.asyncio
async def test_upload_folder_nothing_usable(client: AsyncClient):
    files = [("files", ("site/index.html", b"dup", "text/html"))]
    resp = await client.post("/api/upload/folder", files=files)
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "No valid files could be uploaded"
    assert body["failed_files"][0]["name"] == "index.html"


@pytest.mark.asyncio
async def test_notifications_drained(client: AsyncClient):
    assert (await client.get("/api/notifications")).json() == []
