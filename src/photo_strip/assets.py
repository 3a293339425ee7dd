"""
Concurrent loading of photo and decoration sources.

Every source is submitted to a thread pool at once and the loader only
returns once all of them have settled. A failed or timed-out item is
reported as a failed :class:`AssetResult` rather than raised, so one bad
photo never aborts a whole composition.
"""

from __future__ import annotations

import base64
import binascii
import io
import time
from concurrent.futures import (
    FIRST_COMPLETED,
    Future,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import requests
from PIL import Image, UnidentifiedImageError

from photo_strip.config_defaults import (
    DEFAULT_LOAD_TIMEOUT_SECONDS,
    DEFAULT_MAX_WORKERS,
)
from photo_strip.constants import COLOR_MODE_RGBA
from photo_strip.errors import AssetLoadError
from photo_strip.logging_utils import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photo_strip.type_defs import AssetKind, PhotoSource

_DATA_URI_PREFIX = "data:"
_HTTP_SCHEMES = ("http://", "https://")
_DESCRIBE_MAX_CHARS = 60


@dataclass(frozen=True)
class AssetResult:
    """Outcome of loading one source; exactly one of image/error is set."""

    index: int
    kind: AssetKind
    image: Image.Image | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the source decoded successfully."""
        return self.image is not None


@dataclass(frozen=True)
class LoadedAssets:
    """Settled results for one request, in input order."""

    photos: tuple[AssetResult, ...]
    decorations: tuple[AssetResult, ...]

    @property
    def failed_photos(self) -> tuple[int, ...]:
        """Indices of photos that could not be loaded."""
        return tuple(r.index for r in self.photos if not r.ok)

    @property
    def failed_decorations(self) -> tuple[int, ...]:
        """Indices of decorations that could not be loaded."""
        return tuple(r.index for r in self.decorations if not r.ok)


def describe_source(source: PhotoSource) -> str:
    """Return a short human-readable label for log and error messages."""
    if isinstance(source, Image.Image):
        return f"<image {source.width}x{source.height}>"
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    text = str(source)
    if len(text) > _DESCRIBE_MAX_CHARS:
        return text[:_DESCRIBE_MAX_CHARS] + "..."
    return text


def _decode_data_uri(uri: str) -> bytes:
    """Return the payload of a ``data:`` URI."""
    header, sep, payload = uri.partition(",")
    if not sep:
        msg = "malformed data URI"
        raise ValueError(msg)
    if header.endswith(";base64"):
        return base64.b64decode(payload, validate=True)
    return payload.encode("utf-8")


def _fetch_url(url: str, timeout: float) -> bytes:
    """Download ``url`` and return the response body."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


def _decode_bytes(data: bytes) -> Image.Image:
    """Decode encoded image bytes fully into memory."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.convert(COLOR_MODE_RGBA)


def resolve_source(
    source: PhotoSource,
    *,
    timeout: float = DEFAULT_LOAD_TIMEOUT_SECONDS,
) -> Image.Image:
    """
    Resolve a source reference into a decoded RGBA image.

    Args:
        source: A PIL image, encoded bytes, a ``data:`` URI, an
            ``http(s)`` URL or a filesystem path.
        timeout: Network timeout in seconds for URL sources.

    Returns:
        A new RGBA image owned by the caller.

    Raises:
        AssetLoadError: If the source cannot be read or decoded.

    """
    label = describe_source(source)
    try:
        if isinstance(source, Image.Image):
            return source.convert(COLOR_MODE_RGBA)
        if isinstance(source, bytes):
            return _decode_bytes(source)
        text = str(source)
        if isinstance(source, str) and text.startswith(_DATA_URI_PREFIX):
            return _decode_bytes(_decode_data_uri(text))
        if isinstance(source, str) and text.lower().startswith(_HTTP_SCHEMES):
            return _decode_bytes(_fetch_url(text, timeout))
        with Image.open(Path(text)) as img:
            img.load()
            return img.convert(COLOR_MODE_RGBA)
    except FileNotFoundError as exc:
        raise AssetLoadError(label, "file not found") from exc
    except UnidentifiedImageError as exc:
        raise AssetLoadError(label, "not a recognised image") from exc
    except requests.RequestException as exc:
        raise AssetLoadError(label, f"request failed: {exc}") from exc
    except (binascii.Error, ValueError) as exc:
        raise AssetLoadError(label, f"invalid data: {exc}") from exc
    except OSError as exc:
        raise AssetLoadError(label, str(exc)) from exc


class AssetLoader:
    """
    Load photos and decorations concurrently with a per-asset timeout.

    Each asset's timeout runs from the moment a worker picks it up, so
    items queued behind others get the full allowance. A worker stuck on
    a timed-out item cannot be reclaimed; items still queued once every
    worker is stuck are failed instead of waited on.

    The loader holds no per-request state; each :meth:`load_all` call
    uses its own thread pool and returns fresh results.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_LOAD_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers

    def _load_one(
        self,
        source: PhotoSource,
    ) -> Image.Image:
        return resolve_source(source, timeout=self.timeout_seconds)

    def load_all(
        self,
        photo_sources: Sequence[PhotoSource],
        decoration_sources: Sequence[PhotoSource] = (),
    ) -> LoadedAssets:
        """
        Load every source concurrently and wait for all to settle.

        Items that outlive their own timeout are reported as failed and
        abandoned.
        """
        jobs: list[tuple[AssetKind, int, PhotoSource]] = [
            ("photo", i, src) for i, src in enumerate(photo_sources)
        ]
        jobs += [
            ("decoration", i, src) for i, src in enumerate(decoration_sources)
        ]
        if not jobs:
            return LoadedAssets(photos=(), decorations=())

        workers = max(1, min(self.max_workers, len(jobs)))
        started: dict[int, float] = {}

        def _run(slot: int, source: PhotoSource) -> Image.Image:
            started[slot] = time.monotonic()
            return self._load_one(source)

        executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="photo-strip-load",
        )
        try:
            futures: list[Future[Image.Image]] = [
                executor.submit(_run, slot, src)
                for slot, (_, _, src) in enumerate(jobs)
            ]
            abandoned = self._await_settled(futures, started, workers)
            results = [
                self._settle(kind, index, src, future, abandoned.get(slot))
                for slot, ((kind, index, src), future) in enumerate(
                    zip(jobs, futures),
                )
            ]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return LoadedAssets(
            photos=tuple(r for r in results if r.kind == "photo"),
            decorations=tuple(r for r in results if r.kind == "decoration"),
        )

    def _await_settled(
        self,
        futures: list[Future[Image.Image]],
        started: dict[int, float],
        workers: int,
    ) -> dict[int, str]:
        """
        Block until every future is done or has used up its own timeout.

        Args:
            futures: One future per job, indexed by slot.
            started: Monotonic start time per slot, filled in by workers.
            workers: Size of the pool running the futures.

        Returns:
            The failure reason for each slot that was given up on.

        """
        abandoned: dict[int, str] = {}
        pending = dict(enumerate(futures))
        while True:
            now = time.monotonic()
            for slot, future in list(pending.items()):
                if future.done():
                    del pending[slot]
                elif (
                    slot in started
                    and now - started[slot] >= self.timeout_seconds
                ):
                    abandoned[slot] = (
                        f"timed out after {self.timeout_seconds:g}s"
                    )
                    del pending[slot]
            if not pending:
                return abandoned

            stuck = sum(1 for slot in abandoned if not futures[slot].done())
            if stuck >= workers:
                for slot in pending:
                    abandoned[slot] = "not started; all workers timed out"
                return abandoned

            deadlines = [
                started[slot] + self.timeout_seconds
                for slot in pending
                if slot in started
            ]
            remaining = (
                min(deadlines) - now if deadlines else self.timeout_seconds
            )
            wait(
                list(pending.values()),
                timeout=max(remaining, 0.0),
                return_when=FIRST_COMPLETED,
            )

    def _settle(
        self,
        kind: AssetKind,
        index: int,
        source: PhotoSource,
        future: Future[Image.Image],
        reason: str | None,
    ) -> AssetResult:
        """Convert a finished (or abandoned) future into an AssetResult."""
        if not future.done():
            future.cancel()
            reason = reason or f"timed out after {self.timeout_seconds:g}s"
            logger.warning(
                "Skipping %s %d (%s): %s",
                kind, index, describe_source(source), reason,
            )
            return AssetResult(index=index, kind=kind, error=reason)
        exc = future.exception()
        if exc is not None:
            logger.warning("Skipping %s %d: %s", kind, index, exc)
            return AssetResult(index=index, kind=kind, error=str(exc))
        return AssetResult(index=index, kind=kind, image=future.result())
