"""Custom exceptions for topic mover."""


class TopicMoverError(Exception):
    """Base exception for topic mover errors."""
    pass


class MetadataError(TopicMoverError):
    """Raised when there's an error reading or interpreting note metadata."""
    pass


class FileOperationError(TopicMoverError):
    """Raised when folder creation or file moves fail."""
    pass


class ConfigurationError(TopicMoverError):
    """Raised when there's an error in the settings."""
    pass
