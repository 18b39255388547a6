import logging
from pathlib import Path
from typing import List, Union

from ..models.file_pair import FilePair
from ..repositories.file_pair_repository import FilePairRepository
from ..utils.paths import ensure_printable, rebase

logger = logging.getLogger(__name__)


class FilePairService:
    """
    Pairs every file of a source tree with its counterpart in a destination tree.
    Discovery is source-driven: files that exist only in the destination are never visited.
    """

    def __init__(self):
        self.repository = FilePairRepository()

    def find_pairs(
        self,
        source_dir: Union[str, Path],
        destination_dir: Union[str, Path],
    ) -> List[FilePair]:
        """
        Walk *source_dir* and keep the files whose mirror path exists under *destination_dir*.

        Args:
            source_dir: Root of the tree to walk.
            destination_dir: Root of the mirrored tree.

        Returns:
            List[FilePair]: Pairs in filesystem enumeration order (not sorted).

        Raises:
            DiscoveryError: A directory of the source tree could not be read.
            PathConversionError: A file name cannot be represented as text.
        """
        source_dir = Path(source_dir)
        destination_dir = Path(destination_dir)

        pairs = []
        for source_path in self.repository.iter_files(source_dir):
            ensure_printable(source_path)
            destination_path = rebase(source_path, source_dir, destination_dir)
            if not self.repository.is_file(destination_path):
                logger.debug(f"No counterpart for {source_path}")
                continue
            pairs.append(FilePair(source_path, destination_path))

        logger.info(f"Found {len(pairs)} file pairs under {source_dir}")
        return pairs
