import logging
from pathlib import Path
from typing import Optional

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .exceptions import ConfigError
from .models import Category, RunSummary
from .organization.placer import FilePlacer
from .organization.registry import DuplicateRegistry
from .scanning.filesystem import DiskScanner
from .scanning.hasher import ContentHasher, FileHasher


class ClassfyApp:
    def __init__(self, hasher: Optional[ContentHasher] = None):
        # FileHasher raises HashUnavailable here, before any file is touched
        self.hasher = hasher if hasher is not None else FileHasher()
        self.scanner = DiskScanner()

    def organize(self,
                 src_root: Path,
                 dest_root: Path,
                 dry_run: bool = False,
                 show_progress: bool = False) -> RunSummary:
        """
        Runs the organization pipeline over src_root.
        1. Validate roots & create category folders
        2. Walk the source tree (skipping dest_root if nested inside it)
        3. Place each file (Deduplicate, Classify, Name, Move)
        """
        src_root = src_root.resolve()
        dest_root = dest_root.resolve()
        self._validate(src_root, dest_root)

        if not dry_run:
            self._prepare_destination(dest_root)

        registry = DuplicateRegistry()
        placer = FilePlacer(dest_root, self.hasher, registry, dry_run=dry_run)
        summary = RunSummary()

        logging.info(f"Organizing {src_root} -> {dest_root} (DryRun={dry_run})...")
        files = self.scanner.iter_files(src_root, skip_dirs={dest_root})
        with logging_redirect_tqdm():
            for path in tqdm(files, desc="Organizing", unit="file", disable=not show_progress):
                summary.add(placer.place(path))

        logging.info(
            f"Run complete. Placed {summary.total_placed}, "
            f"duplicates {summary.total_duplicates}, errors {len(summary.errors)}."
        )
        return summary

    def _validate(self, src_root: Path, dest_root: Path):
        if not src_root.is_dir():
            raise ConfigError(f"Source directory does not exist: {src_root}")
        if dest_root.exists() and not dest_root.is_dir():
            raise ConfigError(f"Destination exists but is not a directory: {dest_root}")
        if dest_root == src_root:
            raise ConfigError("Source and destination must be different directories")
        if dest_root in src_root.parents:
            raise ConfigError(f"Source {src_root} lies inside the destination {dest_root}")

    def _prepare_destination(self, dest_root: Path):
        try:
            for category in Category:
                (dest_root / category.folder).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot create destination folders under {dest_root}: {e}") from e
