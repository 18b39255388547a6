"""Path helpers shared by pair discovery and output resolution."""

from pathlib import Path

from ..errors import PathConversionError


def rebase(path: Path, old_root: Path, new_root: Path) -> Path:
    """
    Move *path* from under *old_root* to the same place under *new_root*.

    Works on path components, so a directory name that happens to repeat
    deeper in the path is left alone.

    Raises:
        ValueError: if *path* is not inside *old_root*.
    """
    return Path(new_root) / Path(path).relative_to(old_root)


def ensure_printable(path: Path) -> Path:
    """
    Return *path* unchanged if it can be shown as UTF-8 text.

    Undecodable file names come back from the OS as surrogate escapes;
    those cannot be printed or logged, so they are rejected here.
    """
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError as err:
        raise PathConversionError(
            f"Path is not valid text: {path!r}", path=path
        ) from err
    return path
