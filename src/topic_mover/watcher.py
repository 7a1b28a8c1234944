"""Vault watcher feeding file-system events to the relocation controller."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .core.relocator import RelocationController, RelocationResult
from .exceptions import TopicMoverError
from .infrastructure.adapters.filesystem_adapter import LocalVault
from .models.note import Note
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)


class NoteEventHandler(FileSystemEventHandler):
    """Translates watchdog events into controller calls.

    The observer delivers events one at a time on its own thread, so the
    controller is never entered concurrently.
    """

    def __init__(
        self,
        controller: RelocationController,
        vault: LocalVault,
        store: Optional[SettingsStore] = None
    ):
        super().__init__()
        self.controller = controller
        self.vault = vault
        self.store = store

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if self._is_settings_file(event.src_path):
            self.reload_settings()
            return
        note = self._note_for(event.src_path)
        if note:
            self._dispatch(self.controller.handle_creation, note)

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if self._is_settings_file(event.src_path):
            self.reload_settings()
            return
        note = self._note_for(event.src_path)
        if note:
            self._dispatch(self.controller.handle_modification, note)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        # Editors that save atomically rename a temp file over the target
        if self._is_settings_file(event.dest_path):
            self.reload_settings()
            return
        note = self._note_for(event.dest_path)
        if note:
            self._dispatch(self.controller.handle_modification, note)

    def reload_settings(self) -> None:
        """Pick up settings changed from outside the watcher."""
        if self.store is None:
            return
        try:
            self.controller.settings = self.store.load()
        except (TopicMoverError, OSError) as e:
            logger.error(f"Keeping previous settings, failed to reload {self.store.path}: {e}")
            return
        logger.info(f"Reloaded settings from {self.store.path}")

    def _is_settings_file(self, src_path) -> bool:
        if self.store is None:
            return False
        return Path(src_path).resolve() == self.store.path.resolve()

    def _note_for(self, src_path) -> Optional[Note]:
        file_path = Path(src_path)
        if not self.vault.is_note(file_path):
            return None
        return Note.from_path(file_path.resolve(), self.vault.root)

    def _dispatch(self, handler: Callable[[Note], RelocationResult], note: Note) -> None:
        try:
            handler(note)
        except Exception:
            # One bad note must not stop the observer thread
            logger.exception(f"Unexpected error while handling {note.path}")


class VaultWatcher:
    """Watches a vault directory tree and relocates notes as they change."""

    def __init__(
        self,
        controller: RelocationController,
        vault: LocalVault,
        store: Optional[SettingsStore] = None,
        observer_factory: Callable = Observer
    ):
        self.vault = vault
        self.handler = NoteEventHandler(controller, vault, store)
        self._observer_factory = observer_factory
        self.observer = None

    def start(self) -> None:
        """Start watching in the background."""
        self.observer = self._observer_factory()
        self.observer.schedule(self.handler, str(self.vault.root), recursive=True)
        self.observer.start()
        logger.info(f"Watching {self.vault.root}")

    def stop(self) -> None:
        """Stop watching and wait for the observer thread."""
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None
        logger.info(f"Stopped watching {self.vault.root}")

    def run_forever(self, poll_interval: float = 1.0) -> None:
        """Watch until interrupted with Ctrl+C."""
        self.start()
        try:
            while True:
                time.sleep(poll_interval)
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()
