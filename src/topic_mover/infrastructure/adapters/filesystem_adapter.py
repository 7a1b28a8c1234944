"""
Filesystem Adapter - vault storage on the local file system.

This adapter isolates the relocation logic from OS-specific details,
providing a clean interface for folder and file operations.
"""

import shutil
from pathlib import Path
from typing import Iterator, Optional, Set

from ...exceptions import FileOperationError
from ...models.note import Note
from ..interfaces import VaultStorage

NOTE_EXTENSIONS: Set[str] = {'.md'}


def is_hidden(relative: Path) -> bool:
    """Check whether any component of a vault-relative path is hidden."""
    return any(part.startswith('.') for part in relative.parts)


class LocalVault(VaultStorage):
    """
    Vault storage rooted at a directory.

    Paths passed in and out are vault-relative with forward slashes.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def absolute(self, path: str) -> Path:
        """Map a vault path to an absolute path, refusing paths outside the vault."""
        normalized = self.normalize_path(path)
        if normalized == '/':
            return self.root

        candidate = (self.root / normalized).resolve()
        if not candidate.is_relative_to(self.root):
            raise FileOperationError(f"Path escapes vault: {path}")
        return candidate

    def resolve(self, path: str) -> Optional[Path]:
        try:
            candidate = self.absolute(path)
        except FileOperationError:
            return None
        return candidate if candidate.exists() else None

    def create_folder(self, path: str) -> None:
        directory = self.absolute(path)
        try:
            directory.mkdir(parents=True, exist_ok=False)
        except OSError as e:
            raise FileOperationError(f"Failed to create folder {path}: {e}")

    def move(self, note: Note, new_path: str) -> None:
        source = self.absolute(note.path)
        destination = self.absolute(new_path)

        if not source.is_file():
            raise FileOperationError(f"Note does not exist: {note.path}")
        if destination.exists():
            raise FileOperationError(f"Destination already exists: {new_path}")
        if not destination.parent.is_dir():
            raise FileOperationError(f"Destination folder does not exist: {destination.parent}")

        try:
            shutil.move(str(source), str(destination))
        except (OSError, shutil.Error) as e:
            raise FileOperationError(f"Failed to move {note.path}: {e}")

        note.path = self.normalize_path(new_path)

    def iter_notes(self) -> Iterator[Note]:
        for file_path in sorted(self.root.rglob('*')):
            relative = file_path.relative_to(self.root)
            if is_hidden(relative):
                continue
            if file_path.is_file() and file_path.suffix.lower() in NOTE_EXTENSIONS:
                yield Note(path=relative.as_posix())

    def is_note(self, file_path: Path) -> bool:
        """Check whether an absolute path is a visible note inside the vault."""
        file_path = Path(file_path)
        try:
            relative = file_path.resolve().relative_to(self.root)
        except ValueError:
            return False
        return file_path.suffix.lower() in NOTE_EXTENSIONS and not is_hidden(relative)
