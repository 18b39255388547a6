from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from ..errors import ImgDiffError
from .image import Image


@dataclass(frozen=True)
class FilePair:
    """A source file and its same-named counterpart in the destination tree."""
    source_path: Path
    destination_path: Path


@dataclass
class LoadedPair:
    """
    Both sides of a FilePair after decoding.
    Each side holds either the decoded Image or the error that prevented it.
    """
    pair: FilePair
    source: Image | ImgDiffError
    destination: Image | ImgDiffError

    @property
    def failure(self) -> ImgDiffError | None:
        for side in (self.source, self.destination):
            if isinstance(side, ImgDiffError):
                return side
        return None
