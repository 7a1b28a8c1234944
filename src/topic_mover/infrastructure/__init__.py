"""Infrastructure layer for topic mover."""

from .interfaces import MetadataSource, VaultStorage
from .adapters import FrontmatterMetadataSource, LocalVault

__all__ = [
    "MetadataSource",
    "VaultStorage",
    "FrontmatterMetadataSource",
    "LocalVault",
]
