"""Topic Mover

Files Markdown notes into folders named by their frontmatter properties.
"""

__version__ = "0.1.0"

from .core.normalizer import normalize_folder_name
from .core.path_builder import build_target_path, normalize_path
from .core.relocator import (
    RelocationController,
    RelocationResult,
    MovingSet,
    SETTLE_DELAY,
    CREATION_DELAY
)
from .models.note import Note, FieldValue, ValueKind
from .models.settings import Settings
from .settings_store import SettingsStore
from .infrastructure import (
    MetadataSource,
    VaultStorage,
    FrontmatterMetadataSource,
    LocalVault
)

__all__ = [
    # Core components
    "RelocationController",
    "RelocationResult",
    "MovingSet",
    "SettingsStore",

    # Models
    "Note",
    "FieldValue",
    "ValueKind",
    "Settings",

    # Collaborators
    "MetadataSource",
    "VaultStorage",
    "FrontmatterMetadataSource",
    "LocalVault",

    # Utilities
    "normalize_folder_name",
    "build_target_path",
    "normalize_path",
    "SETTLE_DELAY",
    "CREATION_DELAY"
]
