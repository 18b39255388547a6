"""
Error types raised while comparing image trees.
Every error keeps the path(s) it is about so callers can report them.
"""
from __future__ import annotations
from pathlib import Path


class ImgDiffError(Exception):
    """Base class for all errors the comparison pipeline raises."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ConfigError(ImgDiffError):
    """A required directory is missing or is not a directory."""


class DiscoveryError(ImgDiffError):
    """The source tree could not be walked."""


class PathConversionError(ImgDiffError):
    """A path cannot be represented as printable text."""


class DecodeError(ImgDiffError):
    """The codec rejected the bytes of an image file."""


class UnsupportedImageKindError(DecodeError):
    """The file extension does not map to a known image kind."""


class ImageKindMismatchError(ImgDiffError):
    """The two files of a pair are of different image kinds."""

    def __init__(self, source_path: Path, destination_path: Path):
        super().__init__(
            f"Image kinds differ: {source_path} vs {destination_path}",
            path=source_path,
        )
        self.destination_path = destination_path


class ChannelMismatchError(ImgDiffError):
    """The two images do not share the same channel layout."""


class OutputWriteError(ImgDiffError):
    """A diff artifact or its directory could not be written."""
