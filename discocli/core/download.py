"""Streaming download of package archives."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

import httpx
import structlog

from discocli.core.disco import DiscoClient

logger = structlog.get_logger()

DEFAULT_CHUNK_SIZE = 8192

ProgressCallback = Callable[[int], None]


class DownloadOutcome(StrEnum):
    """Result of a download attempt."""
    SUCCESS = "success"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


def download(
    client: DiscoClient,
    uri: str,
    target: Path,
    expected_size: int,
    progress: ProgressCallback | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DownloadOutcome:
    """Stream ``uri`` into ``target``.

    An existing target is never overwritten. On failure the partially
    written file stays where it is.

    Args:
        client: Disco client whose HTTP session is used
        uri: Direct download URI
        target: Destination file
        expected_size: Size in bytes from the catalog, <= 0 when unknown
        progress: Called with the completed percentage whenever it grows
        chunk_size: Read size in bytes

    Returns:
        The outcome of the attempt
    """
    if target.exists():
        logger.info("download_skipped", path=str(target), reason="already_exists")
        return DownloadOutcome.ALREADY_EXISTS

    logger.info("download_started", uri=uri, path=str(target), size=expected_size)
    received = 0
    last_percent = 0

    try:
        with client.stream(uri) as response, open(target, "wb") as f:
            for chunk in response.iter_bytes(chunk_size=chunk_size):
                f.write(chunk)
                received += len(chunk)
                if progress is not None and expected_size > 0:
                    percent = min(100, received * 100 // expected_size)
                    if percent > last_percent:
                        last_percent = percent
                        progress(percent)
    except (httpx.HTTPError, OSError) as e:
        logger.error("download_failed", uri=uri, path=str(target), received=received, error=str(e))
        return DownloadOutcome.FAILED

    logger.info("download_complete", path=str(target), size=received)
    return DownloadOutcome.SUCCESS
