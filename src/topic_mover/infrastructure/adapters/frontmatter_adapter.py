"""
Frontmatter Adapter - reads note metadata from YAML frontmatter.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ...exceptions import MetadataError
from ...models.note import Note
from ..interfaces import MetadataSource

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


def split_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Split a note into its frontmatter mapping and body.

    Returns ``(None, text)`` when the note has no frontmatter block.

    Raises:
        MetadataError: If the block is not valid YAML or not a mapping
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return None, text

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONTMATTER_DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            break
    else:
        return None, text

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MetadataError(f"Invalid frontmatter: {e}")

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise MetadataError(f"Frontmatter is a {type(data).__name__}, not a mapping")

    return data, body


class FrontmatterMetadataSource(MetadataSource):
    """Metadata source that parses each note's frontmatter on demand."""

    def __init__(self, vault_root: Path, encoding: str = "utf-8"):
        self.vault_root = Path(vault_root)
        self.encoding = encoding

    def get_metadata(self, note: Note) -> Optional[Dict[str, Any]]:
        file_path = self.vault_root / note.path
        try:
            text = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {note.path}: {e}")
            return None

        try:
            frontmatter, _ = split_frontmatter(text)
        except MetadataError as e:
            logger.debug(f"Ignoring frontmatter of {note.path}: {e}")
            return None

        return frontmatter
