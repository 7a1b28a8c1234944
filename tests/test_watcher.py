"""Tests for the vault watcher."""

from unittest.mock import Mock

import pytest
from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from topic_mover.core.relocator import RelocationController, RelocationResult
from topic_mover.infrastructure.adapters import FrontmatterMetadataSource, LocalVault
from topic_mover.models.note import Note
from topic_mover.models.settings import Settings, save_settings
from topic_mover.settings_store import SettingsStore, default_settings_path
from topic_mover.watcher import NoteEventHandler, VaultWatcher


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    root.mkdir()
    return LocalVault(root)


@pytest.fixture
def controller():
    return Mock(spec=RelocationController)


class TestNoteEventHandler:
    """Test NoteEventHandler class."""

    def test_created_note(self, vault, controller):
        handler = NoteEventHandler(controller, vault)

        handler.on_created(FileCreatedEvent(str(vault.root / "new.md")))

        controller.handle_creation.assert_called_once_with(Note("new.md"))

    def test_modified_note(self, vault, controller):
        handler = NoteEventHandler(controller, vault)

        handler.on_modified(FileModifiedEvent(str(vault.root / "inbox" / "a.md")))

        controller.handle_modification.assert_called_once_with(Note("inbox/a.md"))

    def test_moved_note_uses_destination(self, vault, controller):
        handler = NoteEventHandler(controller, vault)

        handler.on_moved(FileMovedEvent(str(vault.root / "a.txt"), str(vault.root / "a.md")))

        controller.handle_modification.assert_called_once_with(Note("a.md"))

    def test_ignores_directories_and_other_files(self, vault, controller):
        handler = NoteEventHandler(controller, vault)

        handler.on_created(DirCreatedEvent(str(vault.root / "soccer")))
        handler.on_created(FileCreatedEvent(str(vault.root / "image.png")))
        handler.on_modified(FileModifiedEvent(str(vault.root / ".obsidian" / "app.md")))

        controller.handle_creation.assert_not_called()
        controller.handle_modification.assert_not_called()

    def test_errors_do_not_escape(self, vault, controller, caplog):
        controller.handle_modification.side_effect = RuntimeError("boom")
        handler = NoteEventHandler(controller, vault)

        handler.on_modified(FileModifiedEvent(str(vault.root / "a.md")))

        assert "Unexpected error while handling a.md" in caplog.text

    def test_settings_file_change_reloads(self, vault, controller):
        store = SettingsStore(default_settings_path(vault.root))
        save_settings(Settings(property_name="category"), store.path)
        handler = NoteEventHandler(controller, vault, store)

        handler.on_modified(FileModifiedEvent(str(store.path)))

        assert controller.settings.property_name == "category"
        controller.handle_modification.assert_not_called()

    def test_invalid_settings_keep_previous(self, vault, controller, caplog):
        store = SettingsStore(default_settings_path(vault.root))
        store.path.write_text("{broken")
        previous = Settings()
        controller.settings = previous
        handler = NoteEventHandler(controller, vault, store)

        handler.on_created(FileCreatedEvent(str(store.path)))

        assert controller.settings is previous
        assert "Keeping previous settings" in caplog.text

    def test_unreadable_settings_keep_previous(self, vault, controller, caplog):
        store = SettingsStore(default_settings_path(vault.root))
        store.path.mkdir()
        previous = Settings()
        controller.settings = previous
        handler = NoteEventHandler(controller, vault, store)

        handler.on_modified(FileModifiedEvent(str(store.path)))

        assert controller.settings is previous
        assert "Keeping previous settings" in caplog.text

    def test_settings_replaced_by_rename_reloads(self, vault, controller):
        store = SettingsStore(default_settings_path(vault.root))
        temp_path = vault.root / ".topic-mover.json.tmp"
        save_settings(Settings(property_name="category"), temp_path)
        temp_path.replace(store.path)
        handler = NoteEventHandler(controller, vault, store)

        handler.on_moved(FileMovedEvent(str(temp_path), str(store.path)))

        assert controller.settings.property_name == "category"
        controller.handle_modification.assert_not_called()


class TestWatcherWithController:
    """Drive a real controller through watcher events."""

    def test_own_move_is_not_handled_twice(self, vault):
        (vault.root / "idea.md").write_text("---\ntopic: Garden Plans\n---\n")
        metadata = Mock(wraps=FrontmatterMetadataSource(vault.root))
        controller = RelocationController(
            Settings(), metadata, vault, sleep=lambda seconds: None
        )
        handler = NoteEventHandler(controller, vault)

        handler.on_created(FileCreatedEvent(str(vault.root / "idea.md")))
        handler.on_moved(FileMovedEvent(
            str(vault.root / "idea.md"),
            str(vault.root / "garden-plans" / "idea.md")
        ))
        handler.on_modified(FileModifiedEvent(str(vault.root / "idea.md")))

        assert (vault.root / "garden-plans" / "idea.md").exists()
        assert metadata.get_metadata.call_count == 1


class TestVaultWatcher:
    """Test VaultWatcher lifecycle."""

    def test_start_and_stop(self, vault, controller):
        observer = Mock()
        watcher = VaultWatcher(controller, vault, observer_factory=lambda: observer)

        watcher.start()
        observer.schedule.assert_called_once_with(watcher.handler, str(vault.root), recursive=True)
        observer.start.assert_called_once()

        watcher.stop()
        observer.stop.assert_called_once()
        observer.join.assert_called_once()
        assert watcher.observer is None

    def test_stop_without_start(self, vault, controller):
        VaultWatcher(controller, vault).stop()
