"""Persisted user preferences.

The on-disk file uses camelCase keys (``storagePath``, ``editorFontSize``...)
and is rewritten atomically on every change.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from devtoolbox.infrastructure.storage.io_text import read_json, write_json_atomic

logger = structlog.get_logger()


class UserPreferences(BaseModel):
    """Preferences persisted between runs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    storage_path: str = ""
    theme: str = ""
    language: str = ""
    auto_save: bool = False
    editor_font_size: int = 0
    editor_font_family: str = ""

    def user_settings(self) -> Dict[str, Any]:
        """Editor-facing preferences; the storage path is managed separately."""
        return self.model_dump(by_alias=True, exclude={"storage_path"})


class PreferencesUpdate(BaseModel):
    """Partial update; unset fields leave the stored value untouched."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    theme: Optional[str] = None
    language: Optional[str] = None
    auto_save: Optional[bool] = None
    editor_font_size: Optional[float] = None
    editor_font_family: Optional[str] = None

    def apply_to(self, current: UserPreferences) -> UserPreferences:
        changes: Dict[str, Any] = {}
        # Empty strings and non-positive sizes never overwrite.
        if self.theme:
            changes["theme"] = self.theme
        if self.language:
            changes["language"] = self.language
        if self.auto_save is not None:
            changes["auto_save"] = self.auto_save
        if self.editor_font_size is not None and self.editor_font_size > 0:
            changes["editor_font_size"] = int(self.editor_font_size)
        if self.editor_font_family:
            changes["editor_font_family"] = self.editor_font_family
        return current.model_copy(update=changes)


class PreferencesStore:
    """Load and save UserPreferences at a fixed config path."""

    def __init__(self, config_path: str | Path) -> None:
        self._path = Path(config_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> UserPreferences:
        try:
            data = read_json(str(self._path))
            if data is None:
                return UserPreferences()
            return UserPreferences.model_validate(data)
        except (OSError, ValueError) as exc:
            logger.warning("preferences_unreadable", path=str(self._path), error=str(exc))
            return UserPreferences()

    def save(self, preferences: UserPreferences) -> None:
        write_json_atomic(str(self._path), preferences.model_dump(by_alias=True))
        logger.info("preferences_saved", path=str(self._path))

    def update(self, patch: PreferencesUpdate) -> UserPreferences:
        updated = patch.apply_to(self.load())
        self.save(updated)
        return updated

    def set_storage_path(self, storage_path: str | Path) -> UserPreferences:
        updated = self.load().model_copy(update={"storage_path": str(storage_path)})
        self.save(updated)
        return updated
