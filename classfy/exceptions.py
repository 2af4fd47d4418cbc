"""
Custom exception hierarchy for classfy.

Fatal errors (ConfigError, HashUnavailable) abort a run before any file is
touched. Per-file errors (ReadError, PlacementError) skip the file and the
run continues.
"""


class ClassfyError(Exception):
    """Base exception for all classfy errors."""
    pass


class ConfigError(ClassfyError):
    """Raised when the source or destination arguments are unusable."""
    pass


class HashUnavailable(ClassfyError):
    """Raised when no content hashing capability is available."""
    pass


class ReadError(ClassfyError):
    """Raised when a file cannot be read, hashed or relocated."""
    pass


class PlacementError(ClassfyError):
    """Raised when no free destination name is found within the retry bound."""
    pass
