import logging
from pathlib import Path

from ..errors import OutputWriteError
from ..models.config import Config
from ..utils.paths import rebase

logger = logging.getLogger(__name__)


class OutputPathService:
    """
    Decides where diff artifacts go and makes sure their directory exists.
    """

    def resolve(self, destination_path: Path, config: Config) -> Path:
        """
        Mirror *destination_path* from the destination tree into the diff tree.

        Args:
            destination_path: A file under config.destination_dir.
            config: Run configuration.

        Returns:
            Path: Same relative location under config.diff_dir.
        """
        return rebase(destination_path, config.destination_dir, config.diff_dir)

    def ensure_parent(self, diff_path: Path) -> Path:
        """
        Create every missing ancestor of *diff_path*. Safe to call repeatedly.
        """
        parent = Path(diff_path).parent
        if parent.is_dir():
            return parent

        logger.info(f"creating directory: {parent}")
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise OutputWriteError(f"Cannot create directory {parent}: {err}", path=parent) from err
        return parent

    def resolve_and_prepare(self, destination_path: Path, config: Config) -> Path:
        diff_path = self.resolve(destination_path, config)
        self.ensure_parent(diff_path)
        return diff_path
