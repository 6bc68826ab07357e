"""API tests for the workspace, convert and settings routers."""

import pytest
from fastapi.testclient import TestClient

from devtoolbox.api.main import create_app
from devtoolbox.bootstrap import AppContext
from devtoolbox.infrastructure.storage.preferences import PreferencesStore
from devtoolbox.services.workspace_store import WorkspaceStore


@pytest.fixture
def context(tmp_path):
    return AppContext(
        store=WorkspaceStore(tmp_path / "ws"),
        preferences=PreferencesStore(tmp_path / "config.json"),
    )


@pytest.fixture
def client(context):
    app = create_app()
    app.state.context = context
    return TestClient(app)


def test_health(client, context):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "root": str(context.store.root)}


class TestWorkspaceRoutes:
    def test_root(self, client, context):
        body = client.get("/api/v1/workspace/root").json()
        assert body["root"] == str(context.store.root)
        assert body["toolScopes"] == ["json", "xml", "base64", "http"]

    def test_set_root_is_persisted(self, client, context, tmp_path):
        target = tmp_path / "other"
        response = client.put("/api/v1/workspace/root", json={"path": str(target)})

        assert response.status_code == 200
        assert response.json()["data"] == {"root": str(target)}
        assert context.store.root == target
        assert context.preferences.load().storage_path == str(target)

    def test_set_root_reverts_when_not_persisted(self, client, context, tmp_path, monkeypatch):
        original = context.store.root

        def unwritable(storage_path):
            raise PermissionError("read-only config")

        monkeypatch.setattr(context.preferences, "set_storage_path", unwritable)
        response = client.put("/api/v1/workspace/root", json={"path": str(tmp_path / "other")})

        assert response.status_code == 500
        assert "could not be saved" in response.json()["detail"]
        assert context.store.root == original
        assert context.preferences.load().storage_path == ""

    def test_create_and_list(self, client):
        created = client.post("/api/v1/workspace/tools/json/files", json={"name": "a.json"})
        assert created.status_code == 200
        assert created.json()["data"]["id"] == "json/a.json"

        again = client.post("/api/v1/workspace/tools/json/files", json={"name": "a.json"})
        assert again.json()["data"]["name"] == "a_1.json"

        folder = client.post("/api/v1/workspace/tools/json/folders", json={"name": "dir"})
        assert folder.json()["data"]["type"] == "folder"

        entries = client.get("/api/v1/workspace/tools/json/entries").json()["data"]
        assert [entry["name"] for entry in entries] == ["dir", "a.json", "a_1.json"]

    def test_unknown_tool_is_forbidden(self, client):
        response = client.get("/api/v1/workspace/tools/nope/entries")
        assert response.status_code == 403

    def test_content_round_trip(self, client):
        client.post("/api/v1/workspace/tools/xml/files", json={"name": "doc.xml"})

        written = client.put(
            "/api/v1/workspace/files/content",
            json={"path": "xml/doc.xml", "content": "<a/>"},
        )
        assert written.json()["data"]["bytesWritten"] == 4

        read = client.get("/api/v1/workspace/files/content", params={"path": "xml/doc.xml"})
        assert read.json() == {"success": True, "data": "<a/>"}

    def test_read_outside_root_is_forbidden(self, client):
        response = client.get("/api/v1/workspace/files/content", params={"path": "../config.json"})
        assert response.status_code == 403
        assert "escapes workspace root" in response.json()["detail"]

    def test_read_missing_is_not_found(self, client):
        response = client.get("/api/v1/workspace/files/content", params={"path": "json/none"})
        assert response.status_code == 404

    def test_rename_collision_is_conflict(self, client):
        client.post("/api/v1/workspace/tools/json/files", json={"name": "a.json"})
        client.post("/api/v1/workspace/tools/json/files", json={"name": "b.json"})

        response = client.post(
            "/api/v1/workspace/entries/rename",
            json={"path": "json/a.json", "new_name": "b.json"},
        )
        assert response.status_code == 409

    def test_copy_duplicate_move_delete(self, client, context):
        client.post("/api/v1/workspace/tools/json/files", json={"name": "a.json"})

        dup = client.post("/api/v1/workspace/entries/duplicate", json={"path": "json/a.json"})
        assert dup.json()["data"]["name"] == "a_copy_1.json"

        copied = client.post(
            "/api/v1/workspace/entries/copy",
            json={"src": "json/a.json", "dst": "xml/a.json"},
        )
        assert copied.json()["data"]["id"] == "xml/a.json"

        moved = client.post(
            "/api/v1/workspace/entries/move",
            json={"src": "json/a_copy_1.json", "dest_dir": "base64"},
        )
        assert moved.json()["data"]["id"] == "base64/a_copy_1.json"

        deleted = client.post("/api/v1/workspace/entries/delete", json={"path": "json/a.json"})
        assert deleted.json() == {"success": True}
        assert not (context.store.root / "json" / "a.json").exists()

    def test_search(self, client):
        client.post("/api/v1/workspace/tools/json/files", json={"name": "a.json"})
        client.put(
            "/api/v1/workspace/files/content",
            json={"path": "json/a.json", "content": "Token token TOKEN"},
        )

        hits = client.get("/api/v1/workspace/search", params={"q": "token"}).json()["data"]
        assert hits == [
            {"fileId": "json/a.json", "fileName": "a.json", "toolName": "json", "count": 3}
        ]

    def test_validation_errors_are_concise(self, client):
        response = client.post("/api/v1/workspace/entries/rename", json={"path": "x"})
        assert response.status_code == 422
        body = response.json()
        assert body["detail"] == "Request validation failed"
        assert any("new_name" in err["field"] for err in body["errors"])


class TestConvertRoutes:
    def test_json_format(self, client):
        response = client.post("/api/v1/convert/json-format", json={"content": '{"a":1}'})
        assert response.json() == {"result": '{\n  "a": 1\n}', "error": ""}

    def test_invalid_input_is_reported_in_body(self, client):
        response = client.post("/api/v1/convert/xml-format", json={"content": "<a>"})
        assert response.status_code == 200
        assert response.json()["error"].startswith("Invalid XML: ")

    def test_base64_round_trip(self, client):
        encoded = client.post("/api/v1/convert/base64-encode", json={"content": "hi"}).json()
        decoded = client.post(
            "/api/v1/convert/base64-decode", json={"content": encoded["result"]}
        ).json()
        assert decoded == {"result": "hi", "error": ""}


class TestSettingsRoutes:
    def test_get_defaults(self, client):
        body = client.get("/api/v1/settings").json()
        assert body["theme"] == ""
        assert "storagePath" not in body

    def test_patch_applies_partial_update(self, client, context):
        client.patch("/api/v1/settings", json={"theme": "dark", "editorFontSize": 14})
        body = client.patch("/api/v1/settings", json={"theme": "", "autoSave": True}).json()

        assert body["theme"] == "dark"
        assert body["editorFontSize"] == 14
        assert body["autoSave"] is True
        assert context.preferences.load().theme == "dark"
