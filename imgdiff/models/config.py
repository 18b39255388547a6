from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """
    Run-wide settings, read-only once built.
    """
    source_dir: Path
    destination_dir: Path
    diff_dir: Path
    verbosity: int = 0
    prefetch_depth: int = 1  # Decoded pairs allowed to wait in the hand-off queue.
    fail_fast: bool = False  # Stop at the first pair that cannot be compared.

    @property
    def verbose(self) -> bool:
        return self.verbosity > 0
