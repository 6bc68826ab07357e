"""Tests for persisted user preferences."""

import json

from devtoolbox.infrastructure.storage.preferences import (
    PreferencesStore,
    PreferencesUpdate,
    UserPreferences,
)


class TestUserPreferences:
    def test_camel_case_round_trip_on_disk(self, tmp_path):
        store = PreferencesStore(tmp_path / "config.json")
        store.save(UserPreferences(storage_path="/data", editor_font_size=13, auto_save=True))

        on_disk = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
        assert on_disk["storagePath"] == "/data"
        assert on_disk["editorFontSize"] == 13
        assert on_disk["autoSave"] is True

        loaded = store.load()
        assert loaded.storage_path == "/data"
        assert loaded.editor_font_size == 13

    def test_user_settings_excludes_storage_path(self):
        prefs = UserPreferences(storage_path="/data", theme="dark")
        assert prefs.user_settings() == {
            "theme": "dark",
            "language": "",
            "autoSave": False,
            "editorFontSize": 0,
            "editorFontFamily": "",
        }

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"theme": "light", "legacyFlag": 1}', encoding="utf-8")
        assert PreferencesStore(path).load().theme == "light"


class TestPreferencesStore:
    def test_missing_file_yields_defaults(self, tmp_path):
        prefs = PreferencesStore(tmp_path / "absent.json").load()
        assert prefs == UserPreferences()

    def test_corrupt_file_yields_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert PreferencesStore(path).load() == UserPreferences()

    def test_non_object_file_yields_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert PreferencesStore(path).load() == UserPreferences()

    def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "config.json"
        PreferencesStore(path).save(UserPreferences(theme="dark"))
        assert path.exists()

    def test_set_storage_path_keeps_other_fields(self, tmp_path):
        store = PreferencesStore(tmp_path / "config.json")
        store.save(UserPreferences(theme="dark"))

        updated = store.set_storage_path(tmp_path / "ws")

        assert updated.storage_path == str(tmp_path / "ws")
        assert store.load().theme == "dark"


class TestPreferencesUpdate:
    def test_partial_update_rules(self, tmp_path):
        store = PreferencesStore(tmp_path / "config.json")
        store.save(
            UserPreferences(
                storage_path="/keep",
                theme="dark",
                language="en",
                auto_save=True,
                editor_font_size=14,
                editor_font_family="Mono",
            )
        )

        updated = store.update(
            PreferencesUpdate(theme="", language="fr", auto_save=False, editor_font_size=0)
        )

        assert updated.theme == "dark"
        assert updated.language == "fr"
        assert updated.auto_save is False
        assert updated.editor_font_size == 14
        assert updated.editor_font_family == "Mono"
        assert updated.storage_path == "/keep"
        assert store.load() == updated

    def test_fractional_font_size_is_truncated(self):
        patch = PreferencesUpdate.model_validate({"editorFontSize": 15.7})
        assert patch.apply_to(UserPreferences()).editor_font_size == 15

    def test_negative_font_size_is_ignored(self):
        patch = PreferencesUpdate(editor_font_size=-3)
        assert patch.apply_to(UserPreferences(editor_font_size=12)).editor_font_size == 12

    def test_unset_auto_save_is_untouched(self):
        patch = PreferencesUpdate(theme="light")
        result = patch.apply_to(UserPreferences(auto_save=True))
        assert result.auto_save is True
        assert result.theme == "light"
