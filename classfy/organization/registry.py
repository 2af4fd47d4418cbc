import logging
from typing import Set


class DuplicateRegistry:
    """Fingerprints already handled in the current run. Never persisted."""

    def __init__(self):
        self._seen: Set[str] = set()

    def seen(self, fingerprint: str) -> bool:
        return fingerprint in self._seen

    def record(self, fingerprint: str):
        if fingerprint in self._seen:
            logging.debug(f"Fingerprint {fingerprint} already recorded")
            return
        self._seen.add(fingerprint)

    def forget(self, fingerprint: str):
        """Releases a fingerprint whose file could not be placed."""
        self._seen.discard(fingerprint)

    def __len__(self) -> int:
        return len(self._seen)
