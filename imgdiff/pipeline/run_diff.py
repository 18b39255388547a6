"""
Run Diff Pipeline
Discovers file pairs, streams them through the background loader, compares
each pair and writes a diff artifact for every pair that differs.
"""

import logging
import sys
from typing import TextIO

from ..errors import ImgDiffError
from ..models.config import Config
from ..models.file_pair import LoadedPair
from ..models.run_report import PairResult, PairStatus, RunReport, RunState
from ..services.diff_service import DiffService
from ..services.file_pair_service import FilePairService
from ..services.image_service import ImageService
from ..services.output_path_service import OutputPathService
from .pair_loader import PairLoader

logger = logging.getLogger(__name__)

DIMENSION_MISMATCH_MESSAGE = "Images have different dimensions, skipping comparison"


def run_diff(
    config: Config,
    *,
    file_pair_service: FilePairService = FilePairService(),
    image_service: ImageService = ImageService(),
    diff_service: DiffService = DiffService(),
    output_path_service: OutputPathService = OutputPathService(),
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> RunReport:
    """
    Compare the source tree against the destination tree.

    State flow: IDLE → DISCOVERING → STREAMING → DONE | FAILED.

    For every pair that decodes and has matching dimensions, the score is
    printed to *out* as "<score>%". Pairs that differ get a diff artifact
    under config.diff_dir. Dimension mismatches are reported and skipped.

    Pairs that cannot be compared (decode, kind, channel or write errors)
    end the run when config.fail_fast is set; otherwise they are recorded
    and the run goes on.

    Args:
        config: Run configuration.
        file_pair_service: Finds the pairs to compare.
        image_service: Decodes and encodes images.
        diff_service: Computes scores and diff images.
        output_path_service: Resolves and prepares artifact paths.
        out: Stream for scores (default: sys.stdout).
        err: Stream for verbose diagnostics (default: sys.stderr).

    Returns:
        RunReport: Final state, per-pair results and the fatal error, if any.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    report = RunReport()

    report.state = RunState.DISCOVERING
    try:
        pairs = file_pair_service.find_pairs(config.source_dir, config.destination_dir)
    except ImgDiffError as error:
        logger.error(f"Discovery failed: {error}")
        report.fail(error)
        return report

    report.state = RunState.STREAMING
    loader = PairLoader(pairs, image_service, prefetch_depth=config.prefetch_depth)
    with loader:
        for loaded in loader:
            result = _process_pair(
                loaded, config, image_service, diff_service, output_path_service, out, err
            )
            report.results.append(result)

            if result.error is not None and config.fail_fast:
                report.fail(result.error)
                return report

    report.state = RunState.DONE
    logger.info(f"Compared {len(report.results)} pairs, {len(report.errors)} failed")
    return report


def _process_pair(
    loaded: LoadedPair,
    config: Config,
    image_service: ImageService,
    diff_service: DiffService,
    output_path_service: OutputPathService,
    out: TextIO,
    err: TextIO,
) -> PairResult:
    pair = loaded.pair

    failure = loaded.failure
    if failure is not None:
        logger.error(f"Cannot compare {pair.source_path}: {failure}")
        return PairResult(pair, PairStatus.FAILED, error=failure)

    src, dest = loaded.source, loaded.destination
    if not image_service.same_dimensions(src, dest):
        print(DIMENSION_MISMATCH_MESSAGE, file=out)
        if config.verbose:
            print(f"{pair.source_path} ({src.width}x{src.height}) vs "
                  f"{pair.destination_path} ({dest.width}x{dest.height})", file=err)
        return PairResult(pair, PairStatus.DIMENSION_MISMATCH)

    try:
        result = diff_service.diff(src, dest)
    except ImgDiffError as error:
        logger.error(f"Cannot compare {pair.source_path}: {error}")
        return PairResult(pair, PairStatus.FAILED, error=error)

    if config.verbose:
        print(f"compared file: {pair.source_path} had diff value of: {result.score}%", file=out)
    else:
        print(f"{result.score}%", file=out)

    diff_path = None
    if result.score != 0.0:
        try:
            diff_path = output_path_service.resolve_and_prepare(pair.destination_path, config)
            result.image.path = diff_path
            image_service.save(result.image)
        except ImgDiffError as error:
            logger.error(f"Cannot write diff for {pair.source_path}: {error}")
            return PairResult(pair, PairStatus.FAILED, score=result.score, error=error)
        if config.verbose:
            print(f"diff found in file: {pair.source_path}", file=err)

    return PairResult(pair, PairStatus.COMPARED, score=result.score, diff_path=diff_path)
