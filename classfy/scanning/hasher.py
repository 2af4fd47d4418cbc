import hashlib
import logging
from pathlib import Path
from typing import Protocol

from .. import config
from ..exceptions import HashUnavailable, ReadError


class ContentHasher(Protocol):
    """Anything that can fingerprint a file's bytes."""

    def compute_hash(self, path: Path) -> str:
        ...


class FileHasher:
    """
    SHA-1 content fingerprinting.

    The algorithm is probed once at construction so that a missing hash
    implementation (e.g. an interpreter built in FIPS mode without SHA-1)
    is reported before any file is touched.
    """

    def __init__(self, algorithm: str = config.HASH_ALGORITHM, chunk_size: int = config.HASH_CHUNK_SIZE):
        try:
            hashlib.new(algorithm)
        except ValueError as e:
            raise HashUnavailable(f"No {algorithm} hash implementation available: {e}") from e
        self.algorithm = algorithm
        self.chunk_size = chunk_size
        logging.debug(f"Using {algorithm} for content fingerprints")

    def compute_hash(self, path: Path) -> str:
        """Reads the whole file in chunks and returns its hex digest."""
        h = hashlib.new(self.algorithm)
        try:
            with open(path, 'rb') as f:
                while chunk := f.read(self.chunk_size):
                    h.update(chunk)
        except OSError as e:
            raise ReadError(f"Cannot read {path}: {e}") from e
        return h.hexdigest()
