"""Data models for topic mover."""

from .note import Note, FieldValue, ValueKind
from .settings import Settings

__all__ = ["Note", "FieldValue", "ValueKind", "Settings"]
