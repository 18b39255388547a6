"""
Pair Loader
Decodes image pairs on a background thread so that reading the next pair
overlaps with comparing and writing the current one.
"""

from __future__ import annotations
import logging
import queue
import threading
from typing import Iterator, List

from ..errors import ImageKindMismatchError, ImgDiffError
from ..models.file_pair import FilePair, LoadedPair
from ..models.image import Image
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

_POLL_SECONDS = 0.1


class _Finished:
    """Queue marker: no more pairs."""


class _Crashed:
    """Queue marker: the producer died on an unexpected exception."""

    def __init__(self, exc: BaseException):
        self.exc = exc


class PairLoader:
    """
    Two-stage pipeline: a producer thread decodes, the caller consumes.

    Decoded pairs come out in exactly the order of *pairs*. At most
    *prefetch_depth* of them wait in the queue, which bounds memory.

    Use as a context manager so the producer is always stopped:

        with PairLoader(pairs) as loader:
            for loaded in loader:
                ...
    """

    def __init__(
        self,
        pairs: List[FilePair],
        image_service: ImageService | None = None,
        prefetch_depth: int = 1,
    ):
        if prefetch_depth < 1:
            raise ValueError(f"prefetch_depth must be at least 1, got {prefetch_depth}")
        self.pairs = list(pairs)
        self.image_service = image_service or ImageService()
        self._queue: queue.Queue = queue.Queue(maxsize=prefetch_depth)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._produce, name="pair-loader", daemon=True)

    # ───────────────────────── producer side
    def load_pair(self, pair: FilePair) -> LoadedPair:
        """
        Decode both files of *pair*. Errors are returned as values, never raised.
        """
        try:
            source_kind = self.image_service.kind_of(pair.source_path)
            destination_kind = self.image_service.kind_of(pair.destination_path)
        except ImgDiffError as err:
            return LoadedPair(pair, err, err)

        if source_kind is not destination_kind:
            err = ImageKindMismatchError(pair.source_path, pair.destination_path)
            return LoadedPair(pair, err, err)

        return LoadedPair(
            pair,
            self._load_side(pair.source_path),
            self._load_side(pair.destination_path),
        )

    def _load_side(self, path) -> Image | ImgDiffError:
        try:
            return self.image_service.load(path)
        except ImgDiffError as err:
            logger.debug(f"Decode failed for {path}: {err}")
            return err

    def _put(self, item) -> bool:
        """Blocking put that gives up once the consumer has gone away."""
        while not self._stop.is_set():
            try:
                self._queue.put(item, timeout=_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def _produce(self) -> None:
        try:
            for pair in self.pairs:
                if self._stop.is_set():
                    return
                if not self._put(self.load_pair(pair)):
                    return
            self._put(_Finished())
        except Exception as exc:
            logger.exception("Pair loader crashed")
            self._put(_Crashed(exc))

    # ───────────────────────── consumer side
    def start(self) -> PairLoader:
        self._thread.start()
        return self

    def close(self) -> None:
        """Stop the producer, drop anything still queued and wait for the thread."""
        self._stop.set()
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
        if self._thread.is_alive():
            self._thread.join()

    def __enter__(self) -> PairLoader:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[LoadedPair]:
        while True:
            item = self._queue.get()
            if isinstance(item, _Finished):
                return
            if isinstance(item, _Crashed):
                raise item.exc
            yield item
