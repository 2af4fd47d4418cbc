import os
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Set

from ..exceptions import ReadError
from ..models import FileRecord
from .hasher import ContentHasher


class DiskScanner:
    def iter_files(self, root: Path, skip_dirs: Optional[Set[Path]] = None) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir.

        Yields regular files only. Directories are descended into (never
        yielded), symlinks and special files are ignored, and any directory
        in skip_dirs is pruned together with its subtree.
        """
        skip_dirs = skip_dirs or set()
        stack = [root]
        while stack:
            current = stack.pop()
            if current in skip_dirs:
                logging.debug(f"Skipping directory {current}")
                continue

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logging.warning(f"Cannot list {current}: {e}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f


def file_timestamp(stat_result: os.stat_result) -> datetime:
    """Best available file timestamp: creation time if the platform has it, else mtime."""
    ts = getattr(stat_result, 'st_birthtime', None)
    if ts is None:
        ts = stat_result.st_mtime
    return datetime.fromtimestamp(ts)


def file_extension(path: Path) -> str:
    """Lowercased extension without the dot; '' for extensionless files."""
    return path.suffix.lower().lstrip('.')


def read_record(path: Path, hasher: ContentHasher) -> FileRecord:
    """Stats and hashes a source file. Raises ReadError if either fails."""
    try:
        stat_result = path.stat()
    except OSError as e:
        raise ReadError(f"Cannot stat {path}: {e}") from e

    return FileRecord(
        path=path.absolute(),
        ext=file_extension(path),
        fingerprint=hasher.compute_hash(path),
        timestamp=file_timestamp(stat_result),
    )
