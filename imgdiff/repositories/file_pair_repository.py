import os
from pathlib import Path
from typing import Iterator, Union

from ..errors import DiscoveryError


def _raise(err: OSError):
    raise err


class FilePairRepository:
    """
    Filesystem access for pair discovery.
    """

    @staticmethod
    def iter_files(folder: Union[str, Path]) -> Iterator[Path]:
        """
        Yield every regular file under *folder*, recursively.

        Order is whatever the filesystem enumerates; it is not sorted and
        may differ between platforms. Directory symlinks are not followed.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise DiscoveryError(f"Not a directory: {folder}", path=folder)

        try:
            for root, _dirs, files in os.walk(folder, onerror=_raise):
                for name in files:
                    path = Path(root) / name
                    if path.is_file():
                        yield path
        except OSError as err:
            failed = Path(err.filename) if err.filename else folder
            raise DiscoveryError(f"Cannot read {failed}: {err.strerror or err}", path=failed) from err

    @staticmethod
    def is_file(path: Path) -> bool:
        return path.is_file()
