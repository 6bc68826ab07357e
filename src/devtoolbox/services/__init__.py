"""Application services."""

from .conversion_service import ConversionResult, ConversionService
from .workspace_store import DEFAULT_TOOL_SCOPES, StoreResult, WorkspaceStore

__all__ = [
    "ConversionResult",
    "ConversionService",
    "DEFAULT_TOOL_SCOPES",
    "StoreResult",
    "WorkspaceStore",
]
