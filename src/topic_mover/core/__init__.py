"""Core topic mover modules."""

from .normalizer import normalize_folder_name
from .path_builder import build_target_path, normalize_path
from .relocator import RelocationController, RelocationResult, MovingSet

__all__ = [
    'normalize_folder_name',
    'build_target_path',
    'normalize_path',
    'RelocationController',
    'RelocationResult',
    'MovingSet',
]
