"""Bootstrap - resolve the workspace root and build the store.

Resolution order for the root:
1. the storage path persisted in user preferences
2. ``settings.default_workspace_root`` (persisted on first run)

Any failure here is fatal for the process and propagates.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from devtoolbox.config import Settings, settings as default_settings
from devtoolbox.infrastructure.storage.preferences import PreferencesStore
from devtoolbox.services.workspace_store import WorkspaceStore

logger = structlog.get_logger()


@dataclass
class AppContext:
    store: WorkspaceStore
    preferences: PreferencesStore


def bootstrap(app_settings: Optional[Settings] = None) -> AppContext:
    """Initialize logging, preferences and the workspace store.

    Safe to call multiple times.
    """
    cfg = app_settings or default_settings
    cfg.setup_logging()

    preferences = PreferencesStore(cfg.config_path)
    prefs = preferences.load()
    if not prefs.storage_path:
        prefs = preferences.set_storage_path(cfg.default_workspace_root)
        logger.info("workspace_root_defaulted", root=prefs.storage_path)

    store = WorkspaceStore(prefs.storage_path, tool_scopes=cfg.tool_scopes)
    logger.info(
        "bootstrap_complete",
        root=str(store.root),
        tool_scopes=list(store.tool_scopes),
        config=str(preferences.path),
    )
    return AppContext(store=store, preferences=preferences)


if __name__ == "__main__":
    bootstrap()
