from datetime import datetime
from typing import Optional

from .. import config
from ..models import Category


def classify(extension: str) -> Category:
    """Maps an extension (with or without leading dot, any case) to its Category."""
    ext = extension.lower().lstrip('.')
    return Category(config.EXT_TO_CATEGORY.get(ext, Category.OTHERS.value))


def build_name(timestamp: datetime,
               fingerprint: str,
               extension: str,
               counter: Optional[int] = None) -> str:
    """
    Builds the destination filename: YYYYMMDD-HHMMSS-<hash4>[_<counter>].<ext>

    The name says nothing about what is already at the destination; picking
    a free counter is the placer's job.
    """
    stem = f"{timestamp.strftime(config.TIMESTAMP_FORMAT)}-{fingerprint[:config.HASH_PREFIX_LENGTH]}"
    if counter:
        stem = f"{stem}_{counter}"
    ext = extension.lower().lstrip('.')
    return f"{stem}.{ext}" if ext else stem
