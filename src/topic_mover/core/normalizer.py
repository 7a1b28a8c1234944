"""Folder-name normalization."""

import re

# Characters that cannot appear in a path segment, plus ASCII control characters
_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f-\x9f]')
_WHITESPACE = re.compile(r'\s+')
_HYPHENS = re.compile(r'-+')


def normalize_folder_name(name: str, enabled: bool = True) -> str:
    """Turn a metadata value into a folder name.

    With normalization disabled the value is only trimmed. Otherwise it is
    lowercased, stripped of characters that are invalid in file names, and
    whitespace runs become single hyphens. The result may be empty.
    """
    if not enabled:
        return name.strip()

    name = name.lower().strip()
    name = _INVALID_CHARS.sub('', name)
    name = _WHITESPACE.sub('-', name)
    name = _HYPHENS.sub('-', name)
    return name.strip('-')
