"""Note model and metadata field values."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, Optional


@dataclass(slots=True)
class Note:
    """A Markdown note inside the vault.

    ``path`` is relative to the vault root and always uses forward slashes.
    """

    path: str

    @property
    def name(self) -> str:
        """Get the file name without folders."""
        return PurePosixPath(self.path).name

    @classmethod
    def from_path(cls, file_path: Path, vault_root: Path) -> "Note":
        """Create a note from an absolute file path inside the vault."""
        relative = Path(file_path).relative_to(vault_root)
        return cls(path=relative.as_posix())


class ValueKind(Enum):
    """Shapes a frontmatter value can take."""
    SCALAR = "scalar"
    LIST = "list"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class FieldValue:
    """A raw frontmatter value tagged with its shape."""

    kind: ValueKind
    raw: Any

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["FieldValue"]:
        """Tag a raw value, or return None when it is absent or falsy."""
        if not raw:
            return None
        if isinstance(raw, str):
            return cls(ValueKind.SCALAR, raw)
        if isinstance(raw, (list, tuple)):
            return cls(ValueKind.LIST, list(raw))
        return cls(ValueKind.OTHER, raw)

    def as_folder_value(self) -> str:
        """Get the string used to name a folder."""
        if self.kind is ValueKind.SCALAR:
            return self.raw
        if self.kind is ValueKind.LIST:
            return _render(self.raw[0])
        return _render(self.raw)


def _render(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
