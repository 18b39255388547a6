"""
imgdiff command line
Compares two mirrored image trees and writes visual diffs for files that differ.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from ..errors import ConfigError
from ..models.config import Config
from ..pipeline.run_diff import run_diff

logger = logging.getLogger(__name__)

MISSING_ARGS_MESSAGE = "Missing cmd line arguments use imgdiff -h to see help"

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="imgdiff",
        description="Diff same-named BMP/PNG images in two directory trees.",
    )
    ap.add_argument("-s", "--src-dir", default=os.getenv("IMGDIFF_SRC_DIR"),
                    help="source directory")
    ap.add_argument("-d", "--dest-dir", default=os.getenv("IMGDIFF_DEST_DIR"),
                    help="destination directory to compare against")
    ap.add_argument("-f", "--diff-dir", default=os.getenv("IMGDIFF_DIFF_DIR"),
                    help="directory where diff images are written")
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="print per-file results; repeat for debug logging")
    ap.add_argument("--prefetch", type=int,
                    default=os.getenv("IMGDIFF_PREFETCH_DEPTH", "1"),
                    help="decoded pairs allowed to wait ahead of the comparison (default: 1)")
    ap.add_argument("--fail-fast", action="store_true",
                    default=_env_flag("IMGDIFF_FAIL_FAST"),
                    help="stop at the first pair that cannot be compared")
    return ap


def build_config(args: argparse.Namespace) -> Config:
    """
    Turn parsed arguments into a Config.

    Raises:
        ConfigError: a directory argument is missing, or a tree to compare
            does not exist.
    """
    if not (args.src_dir and args.dest_dir and args.diff_dir):
        raise ConfigError(MISSING_ARGS_MESSAGE)
    if args.prefetch < 1:
        raise ConfigError(f"--prefetch must be at least 1, got {args.prefetch}")

    config = Config(
        source_dir=Path(args.src_dir),
        destination_dir=Path(args.dest_dir),
        diff_dir=Path(args.diff_dir),
        verbosity=args.verbose,
        prefetch_depth=args.prefetch,
        fail_fast=args.fail_fast,
    )
    for directory in (config.source_dir, config.destination_dir):
        if not directory.is_dir():
            raise ConfigError(f"Not a directory: {directory}", path=directory)
    return config


def configure_logging(verbosity: int) -> None:
    # stderr only: stdout carries the scores
    logging.basicConfig(
        level=LOG_LEVELS.get(verbosity, logging.DEBUG),
        format=LOG_FORMAT,
        datefmt='%H:%M:%S',
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    # search from the working directory, not from this installed module
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = build_config(args)
    except ConfigError as err:
        print(err, file=sys.stderr)
        return 1

    logger.info(f"Parsed config: {config}")

    report = run_diff(config)
    if report.error is not None:
        print(f"Error occurred: {report.error}", file=sys.stderr)
        return 1
    if report.errors:
        print(f"{len(report.errors)} file pair(s) could not be compared", file=sys.stderr)
        return 1

    logger.info("Compared everything, process ended with great success!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
