from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..errors import ImgDiffError
from .file_pair import FilePair


class RunState(Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


class PairStatus(Enum):
    COMPARED = "compared"
    DIMENSION_MISMATCH = "dimension_mismatch"
    FAILED = "failed"


@dataclass
class PairResult:
    """
    Outcome for one FilePair. The diff image itself is not kept.
    """
    pair: FilePair
    status: PairStatus
    score: float | None = None
    diff_path: Path | None = None  # Set only when an artifact was written.
    error: ImgDiffError | None = None


@dataclass
class RunReport:
    """
    Everything a run produced, in processing order.
    """
    state: RunState = RunState.IDLE
    results: list[PairResult] = field(default_factory=list)
    error: ImgDiffError | None = None  # First fatal error, set only in FAILED.

    @property
    def errors(self) -> list[ImgDiffError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE and not self.errors

    def fail(self, error: ImgDiffError) -> None:
        self.state = RunState.FAILED
        self.error = error
