"""Workspace router - tree listing, file operations and search."""

from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from devtoolbox.api.dependencies import get_preferences_store, get_workspace_store
from devtoolbox.infrastructure.storage.preferences import PreferencesStore
from devtoolbox.services.workspace_store import StoreResult, WorkspaceStore

logger = structlog.get_logger()

router = APIRouter(prefix="/workspace", tags=["workspace"])

_STATUS_BY_ERROR_CODE = {
    "access_denied": 403,
    "not_found": 404,
    "already_exists": 409,
}


def _unwrap(result: StoreResult) -> Dict[str, Any]:
    if not result.success:
        status = _STATUS_BY_ERROR_CODE.get(result.error_code, 500)
        raise HTTPException(status_code=status, detail=result.error)
    return result.to_dict()


class RootRequest(BaseModel):
    path: str = Field(min_length=1)


class CreateEntryRequest(BaseModel):
    name: str
    parent_path: str = ""


class PathRequest(BaseModel):
    path: str


class RenameRequest(BaseModel):
    path: str
    new_name: str


class CopyRequest(BaseModel):
    src: str
    dst: str


class MoveRequest(BaseModel):
    src: str
    dest_dir: str


class WriteRequest(BaseModel):
    path: str
    content: str


@router.get("/root")
async def get_root(store: WorkspaceStore = Depends(get_workspace_store)):
    return {"root": str(store.root), "toolScopes": list(store.tool_scopes)}


@router.put("/root")
async def set_root(
    request: RootRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
    preferences: PreferencesStore = Depends(get_preferences_store),
):
    """Switch the workspace root and persist it.

    When the new root cannot be saved the store goes back to the previous one.
    """
    previous = store.root
    payload = _unwrap(store.set_root(request.path))
    try:
        preferences.set_storage_path(store.root)
    except OSError as exc:
        logger.error("workspace_root_not_persisted", root=str(store.root), error=str(exc))
        store.set_root(previous)
        raise HTTPException(
            status_code=500,
            detail=f"workspace root could not be saved: {exc}",
        ) from exc
    return payload


@router.get("/tools/{tool}/entries")
async def list_entries(tool: str, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.list(tool))


@router.post("/tools/{tool}/files")
async def create_file(
    tool: str,
    request: CreateEntryRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    return _unwrap(store.create_file(tool, request.parent_path, request.name))


@router.post("/tools/{tool}/folders")
async def create_folder(
    tool: str,
    request: CreateEntryRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    return _unwrap(store.create_folder(tool, request.parent_path, request.name))


@router.post("/entries/rename")
async def rename_entry(request: RenameRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.rename(request.path, request.new_name))


@router.post("/entries/delete")
async def delete_entry(request: PathRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.delete(request.path))


@router.post("/entries/copy")
async def copy_entry(request: CopyRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.copy(request.src, request.dst))


@router.post("/entries/duplicate")
async def duplicate_entry(request: PathRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.duplicate(request.path))


@router.post("/entries/move")
async def move_entry(request: MoveRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.move(request.src, request.dest_dir))


@router.get("/files/content")
async def read_file(
    path: str = Query(..., min_length=1),
    store: WorkspaceStore = Depends(get_workspace_store),
):
    return _unwrap(store.read(path))


@router.put("/files/content")
async def write_file(request: WriteRequest, store: WorkspaceStore = Depends(get_workspace_store)):
    return _unwrap(store.write(request.path, request.content))


@router.get("/search")
async def search(
    q: str = Query(default=""),
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """Case-insensitive search across every tool scope."""
    return _unwrap(store.search(q))
