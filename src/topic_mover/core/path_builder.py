"""Target path construction for relocated notes."""

import re
import unicodedata
from typing import Optional

_SEPARATORS = re.compile(r'[\\/]+')


def normalize_path(path: str) -> str:
    """Canonicalize a vault-relative path.

    Separators are unified to single forward slashes, leading and trailing
    slashes are dropped and the text is NFC-normalized. The vault root is
    represented as ``/``.
    """
    path = path.replace('\u00a0', ' ').replace('\u202f', ' ')
    path = _SEPARATORS.sub('/', path).strip('/')
    path = unicodedata.normalize('NFC', path)
    return path or '/'


def build_target_path(
    main_folder: str,
    subfolder: Optional[str] = None,
    base_folder: Optional[str] = None,
    use_subfolders: bool = False
) -> str:
    """Compose the folder a note belongs in.

    Args:
        main_folder: Normalized folder name from the main property
        subfolder: Normalized folder name from the subfolder property
        base_folder: Folder all targets live under, may be nested
        use_subfolders: Whether the subfolder level is wanted

    Returns:
        Canonical vault-relative folder path
    """
    target = main_folder

    if use_subfolders and subfolder:
        target = f"{target}/{subfolder}"

    if base_folder:
        base = normalize_path(base_folder)
        if base != '/':
            target = f"{base}/{target}"

    return normalize_path(target)
