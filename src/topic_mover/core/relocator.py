"""Relocation of notes into folders derived from their metadata."""

import logging
import math
import time
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..exceptions import FileOperationError
from ..infrastructure.interfaces import MetadataSource, VaultStorage
from ..models.note import FieldValue, Note
from ..models.settings import Settings
from .normalizer import normalize_folder_name
from .path_builder import build_target_path

logger = logging.getLogger(__name__)

# Seconds a path stays guarded after its relocation attempt finishes
SETTLE_DELAY = 0.5

# Seconds to wait after a note is created before reading its metadata
CREATION_DELAY = 0.1


class RelocationResult(Enum):
    """Outcome of handling one note."""
    DISABLED = "disabled"
    IN_FLIGHT = "in_flight"
    NO_METADATA = "no_metadata"
    NO_VALUE = "no_value"
    INVALID_FOLDER_NAME = "invalid_folder_name"
    FOLDER_MISSING = "folder_missing"
    FOLDER_CREATE_FAILED = "folder_create_failed"
    ALREADY_IN_PLACE = "already_in_place"
    MOVED = "moved"
    MOVE_FAILED = "move_failed"
    ERROR = "error"


class MovingSet:
    """Paths whose events are currently suppressed.

    A held path is suppressed until it is released; a released path stays
    suppressed until ``delay`` seconds have passed on the clock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._expiry: Dict[str, float] = {}

    def hold(self, path: str) -> None:
        self._expiry[path] = math.inf

    def release(self, path: str, delay: float) -> None:
        self._expiry[path] = self._clock() + delay

    def _prune(self) -> None:
        now = self._clock()
        expired = [path for path, expiry in self._expiry.items() if expiry <= now]
        for path in expired:
            del self._expiry[path]

    def __contains__(self, path: str) -> bool:
        self._prune()
        return path in self._expiry

    def __len__(self) -> int:
        self._prune()
        return len(self._expiry)


class RelocationController:
    """Moves notes into the folder named by their metadata."""

    def __init__(
        self,
        settings: Settings,
        metadata_source: MetadataSource,
        storage: VaultStorage,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        settle_delay: float = SETTLE_DELAY,
        creation_delay: float = CREATION_DELAY
    ):
        self.settings = settings
        self.metadata_source = metadata_source
        self.storage = storage
        self.sleep = sleep
        self.settle_delay = settle_delay
        self.creation_delay = creation_delay
        self.moving = MovingSet(clock)

    def handle_creation(self, note: Note) -> RelocationResult:
        """Handle a newly created note once its metadata has had time to appear."""
        self.sleep(self.creation_delay)
        return self.handle_modification(note)

    def handle_modification(self, note: Note) -> RelocationResult:
        """Relocate a note whose metadata may have changed."""
        if not self.settings.enabled:
            return RelocationResult.DISABLED

        # Events caused by our own moves
        if note.path in self.moving:
            logger.debug(f"Skipping {note.path}: relocation in progress")
            return RelocationResult.IN_FLIGHT

        metadata = self.metadata_source.get_metadata(note)
        if not metadata:
            return RelocationResult.NO_METADATA

        values = self.extract_values(metadata)
        if values is None:
            logger.debug(f"Skipping {note.path}: no '{self.settings.property_name}' property")
            return RelocationResult.NO_VALUE

        main_value, subfolder_value = values
        return self.move_file_to_folder(note, main_value, subfolder_value)

    def extract_values(self, metadata: Dict) -> Optional[Tuple[str, Optional[str]]]:
        """Get the main and subfolder values from a metadata mapping.

        Returns None when the main property is missing or empty. The subfolder
        value is None when subfolders are off or the property is missing.
        """
        main = FieldValue.from_raw(metadata.get(self.settings.property_name))
        if main is None:
            return None

        main_value = main.as_folder_value()
        if not main_value:
            return None

        subfolder_value = None
        if self.settings.use_subfolders:
            subfolder = FieldValue.from_raw(metadata.get(self.settings.subfolder_property))
            if subfolder is not None:
                subfolder_value = subfolder.as_folder_value() or None

        return main_value, subfolder_value

    def target_folder(self, main_value: str, subfolder_value: Optional[str] = None) -> Optional[str]:
        """Compute the folder for the given values, or None if the main value is unusable."""
        normalize = self.settings.normalize_folder_names

        main_folder = normalize_folder_name(main_value, normalize)
        if not main_folder:
            return None

        subfolder = None
        if self.settings.use_subfolders and subfolder_value:
            subfolder = normalize_folder_name(subfolder_value, normalize)

        base_folder = None
        if normalize_folder_name(self.settings.base_folder, normalize):
            base_folder = self.settings.base_folder.strip()

        return build_target_path(main_folder, subfolder, base_folder, self.settings.use_subfolders)

    def plan(self, note: Note) -> Optional[str]:
        """Get the path a note would be moved to, without touching the vault.

        Returns None when the note would stay where it is.
        """
        if not self.settings.enabled:
            return None

        metadata = self.metadata_source.get_metadata(note)
        if not metadata:
            return None

        values = self.extract_values(metadata)
        if values is None:
            return None

        folder = self.target_folder(*values)
        if folder is None:
            return None

        if self.storage.resolve(folder) is None and not self.settings.create_folders:
            return None

        target_path = self.storage.normalize_path(f"{folder}/{note.name}")
        if self.storage.normalize_path(note.path) == target_path:
            return None
        return target_path

    def move_file_to_folder(
        self,
        note: Note,
        main_value: str,
        subfolder_value: Optional[str] = None
    ) -> RelocationResult:
        """Move a note into the folder named by the given values."""
        original_path = note.path
        self.moving.hold(original_path)

        try:
            return self._relocate(note, main_value, subfolder_value)
        finally:
            self.moving.release(original_path, self.settle_delay)
            if note.path != original_path:
                self.moving.release(note.path, self.settle_delay)

    def _relocate(self, note: Note, main_value: str, subfolder_value: Optional[str]) -> RelocationResult:
        folder = self.target_folder(main_value, subfolder_value)
        if folder is None:
            logger.warning(
                f'Invalid folder name from property "{self.settings.property_name}": "{main_value}"'
            )
            return RelocationResult.INVALID_FOLDER_NAME

        if self.storage.resolve(folder) is None:
            if not self.settings.create_folders:
                logger.warning(f"Target folder does not exist and auto-create is disabled: {folder}")
                return RelocationResult.FOLDER_MISSING

            try:
                self.storage.create_folder(folder)
            except FileOperationError as e:
                logger.error(f"Failed to create folder {folder}: {e}")
                return RelocationResult.FOLDER_CREATE_FAILED
            logger.info(f"Created folder {folder}")

        target_path = self.storage.normalize_path(f"{folder}/{note.name}")
        if self.storage.normalize_path(note.path) == target_path:
            return RelocationResult.ALREADY_IN_PLACE

        try:
            self.storage.move(note, target_path)
        except FileOperationError as e:
            logger.error(f"Failed to move file {note.name}: {e}")
            return RelocationResult.MOVE_FAILED

        logger.info(f"Moved {note.name} to {target_path}")
        return RelocationResult.MOVED

    def organize_vault(self, notes: Iterable[Note]) -> Dict[RelocationResult, int]:
        """Handle every note once and count the outcomes."""
        results = {result: 0 for result in RelocationResult}

        for note in notes:
            try:
                result = self.handle_modification(note)
            except Exception as e:
                logger.error(f"Failed to process {note.path}: {e}")
                result = RelocationResult.ERROR
            results[result] += 1

        return results
