from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from . import config


class Category(str, Enum):
    IMAGES = 'images'
    DOCUMENTS = 'documents'
    MUSIC = 'music'
    VIDEOS = 'videos'
    ARCHIVES = 'archives'
    OTHERS = 'others'

    @property
    def folder(self) -> str:
        """Name of the folder this category is placed into."""
        return config.CATEGORY_FOLDERS[self.value]


class PlacementStatus(str, Enum):
    PLACED = 'Placed'
    DUPLICATE = 'Duplicate'
    ERROR = 'Error'


@dataclass
class FileRecord:
    """
    Represents a source file found during a run.
    """
    path: Path
    ext: str                # lowercased, without the leading dot ('' if none)
    fingerprint: str
    timestamp: datetime


@dataclass
class Placement:
    """Outcome of handing one source file to the placer."""
    source: Path
    status: PlacementStatus
    record: Optional[FileRecord] = None
    category: Optional[Category] = None
    destination: Optional[Path] = None
    notes: str = ""


def _empty_counts() -> Dict[Category, int]:
    return {category: 0 for category in Category}


@dataclass
class RunSummary:
    """Statistics aggregated by the orchestrator over one run."""
    placed: Dict[Category, int] = field(default_factory=_empty_counts)
    duplicates: List[Path] = field(default_factory=list)
    errors: List[Placement] = field(default_factory=list)
    placements: List[Placement] = field(default_factory=list)

    def add(self, placement: Placement):
        self.placements.append(placement)
        if placement.status is PlacementStatus.PLACED:
            self.placed[placement.category] += 1
        elif placement.status is PlacementStatus.DUPLICATE:
            self.duplicates.append(placement.source)
        else:
            self.errors.append(placement)

    @property
    def total_placed(self) -> int:
        return sum(self.placed.values())

    @property
    def total_duplicates(self) -> int:
        return len(self.duplicates)
