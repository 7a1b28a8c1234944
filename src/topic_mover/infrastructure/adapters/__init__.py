"""
Adapters - Infrastructure Layer

Concrete metadata and storage implementations backed by the local file system.
"""

from .frontmatter_adapter import FrontmatterMetadataSource, split_frontmatter
from .filesystem_adapter import LocalVault

__all__ = [
    "FrontmatterMetadataSource",
    "split_frontmatter",
    "LocalVault",
]
