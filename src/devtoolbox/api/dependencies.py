"""FastAPI dependencies."""

from fastapi import Request

from devtoolbox.bootstrap import AppContext
from devtoolbox.infrastructure.storage.preferences import PreferencesStore
from devtoolbox.services.conversion_service import ConversionService
from devtoolbox.services.workspace_store import WorkspaceStore


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_workspace_store(request: Request) -> WorkspaceStore:
    """The store instance bound to this application."""
    return get_app_context(request).store


def get_preferences_store(request: Request) -> PreferencesStore:
    return get_app_context(request).preferences


def get_conversion_service() -> ConversionService:
    return ConversionService()
