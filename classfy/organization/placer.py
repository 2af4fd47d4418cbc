import shutil
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from .. import config
from ..exceptions import PlacementError, ReadError
from ..models import Category, FileRecord, Placement, PlacementStatus
from ..scanning.filesystem import read_record
from ..scanning.hasher import ContentHasher
from .registry import DuplicateRegistry
from .rules import build_name, classify

# Fingerprint reported for a destination slot held by something that is not a regular file
OCCUPIED = "<occupied>"


class FilePlacer:
    def __init__(self,
                 dest_root: Path,
                 hasher: ContentHasher,
                 registry: DuplicateRegistry,
                 dry_run: bool = False,
                 max_attempts: int = config.MAX_COLLISION_ATTEMPTS):
        self.dest_root = dest_root
        self.hasher = hasher
        self.registry = registry
        self.dry_run = dry_run
        self.max_attempts = max_attempts
        # Destinations claimed in a dry run, which never materialise on disk
        self._claimed: Dict[Path, str] = {}

    def place(self, path: Path) -> Placement:
        """
        Decides whether a source file is a duplicate or where it goes, then moves it.

        Duplicates are checked against this run's registry first, then against
        whatever already sits at the candidate destination.
        """
        try:
            record = read_record(path, self.hasher)
        except ReadError as e:
            logging.error(f"Skipping unreadable file {path}: {e}")
            return Placement(path, PlacementStatus.ERROR, notes=str(e))

        if self.registry.seen(record.fingerprint):
            logging.info(f"Skipping duplicate file: {path} (hash: {record.fingerprint})")
            return Placement(path, PlacementStatus.DUPLICATE, record=record,
                             notes=f"Duplicate content (hash: {record.fingerprint})")

        self.registry.record(record.fingerprint)
        category = classify(record.ext)

        try:
            dest, is_duplicate = self._resolve_destination(record, category)
            if is_duplicate:
                logging.info(f"Skipping duplicate file: {path} (already exists as {dest})")
                return Placement(path, PlacementStatus.DUPLICATE, record=record, category=category,
                                 destination=dest, notes=f"Already exists as {dest}")
            self._relocate(record, dest)
        except (ReadError, PlacementError) as e:
            self.registry.forget(record.fingerprint)
            logging.error(f"Failed to place {path}: {e}")
            return Placement(path, PlacementStatus.ERROR, record=record, category=category, notes=str(e))

        logging.info(f"Processed: {path} -> {dest}")
        return Placement(path, PlacementStatus.PLACED, record=record, category=category, destination=dest)

    def _resolve_destination(self, record: FileRecord, category: Category) -> Tuple[Path, bool]:
        """
        Finds the first slot that is free or already holds this content.

        Returns (path, is_duplicate).
        """
        folder = self.dest_root / category.folder
        for counter in range(self.max_attempts + 1):
            candidate = folder / build_name(record.timestamp, record.fingerprint, record.ext, counter)
            existing = self._fingerprint_at(candidate)
            if existing is None:
                return candidate, False
            if existing == record.fingerprint:
                return candidate, True
            logging.debug(f"Name clash at {candidate}, trying next suffix")

        raise PlacementError(
            f"No free name for {record.path} in {folder} after {self.max_attempts} attempts"
        )

    def _fingerprint_at(self, candidate: Path) -> Optional[str]:
        if candidate in self._claimed:
            return self._claimed[candidate]
        try:
            if candidate.is_symlink() or (candidate.exists() and not candidate.is_file()):
                return OCCUPIED
            if not candidate.exists():
                return None
        except OSError as e:
            raise ReadError(f"Cannot inspect {candidate}: {e}") from e
        return self.hasher.compute_hash(candidate)

    def _relocate(self, record: FileRecord, dest: Path):
        if self.dry_run:
            logging.info(f"[DRY RUN] Move {record.path} -> {dest}")
            self._claimed[dest] = record.fingerprint
            return

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(record.path), str(dest))
        except OSError as e:
            raise ReadError(f"Cannot move {record.path} -> {dest}: {e}") from e
