"""
Collaborator interfaces used by the relocation controller.

The controller only talks to these abstractions, so it can be driven by the
local file system or by test doubles.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from ..models.note import Note
from ..core.path_builder import normalize_path


class MetadataSource(ABC):
    """Supplies parsed metadata for notes."""

    @abstractmethod
    def get_metadata(self, note: Note) -> Optional[Dict[str, Any]]:
        """Return the note's metadata mapping, or None if it has none."""
        pass


class VaultStorage(ABC):
    """Storage operations on the vault tree."""

    @abstractmethod
    def resolve(self, path: str) -> Optional[Path]:
        """Return the entity at a vault path, or None if nothing is there."""
        pass

    @abstractmethod
    def create_folder(self, path: str) -> None:
        """Create a folder.

        Raises:
            FileOperationError: If the folder cannot be created
        """
        pass

    @abstractmethod
    def move(self, note: Note, new_path: str) -> None:
        """Move a note to a new vault path and update ``note.path``.

        Raises:
            FileOperationError: If the move is rejected
        """
        pass

    @abstractmethod
    def iter_notes(self) -> Iterator[Note]:
        """Yield every note in the vault."""
        pass

    def normalize_path(self, path: str) -> str:
        """Canonicalize a vault-relative path."""
        return normalize_path(path)
