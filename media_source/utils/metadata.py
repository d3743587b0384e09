"""Duration and MIME extraction for audio and video content."""

import asyncio
import json
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from media_source.config.constants import FFPROBE_FORMAT_TYPES
from media_source.config.settings import settings
from media_source.utils.logger import logger


@dataclass(frozen=True)
class MediaMetadata:
    """What an extractor could learn about a media buffer or file."""

    mime_type: Optional[str] = None
    duration: Optional[timedelta] = None

    @classmethod
    def from_millis(
        cls, mime_type: Optional[str], duration_ms: Optional[int]
    ) -> "MediaMetadata":
        duration = None
        if duration_ms is not None:
            duration = timedelta(milliseconds=duration_ms)
        return cls(mime_type=mime_type, duration=duration)


class MetadataExtractor(ABC):
    """Reads track metadata from raw media content."""

    @abstractmethod
    async def extract_from_bytes(
        self, data: bytes, file_name: Optional[str] = None
    ) -> Optional[MediaMetadata]:
        """Return metadata for an in-memory buffer, or None if unavailable."""

    @abstractmethod
    async def extract_from_file(self, path: str) -> Optional[MediaMetadata]:
        """Return metadata for a file on disk, or None if unavailable."""


class FfprobeMetadataExtractor(MetadataExtractor):
    """Extractor backed by the ``ffprobe`` command line tool.

    Returns None when ffprobe is not installed or cannot parse the input.
    """

    def __init__(self, ffprobe_path: Optional[str] = None):
        self.ffprobe_path = ffprobe_path or settings.FFPROBE_PATH

    def is_available(self) -> bool:
        return shutil.which(self.ffprobe_path) is not None

    async def extract_from_bytes(
        self, data: bytes, file_name: Optional[str] = None
    ) -> Optional[MediaMetadata]:
        return await self._probe("pipe:0", data)

    async def extract_from_file(self, path: str) -> Optional[MediaMetadata]:
        return await self._probe(path, None)

    async def _probe(self, target: str, data: Optional[bytes]) -> Optional[MediaMetadata]:
        if not self.is_available():
            logger.debug("ffprobe not available, skipping metadata extraction")
            return None

        proc = await asyncio.create_subprocess_exec(
            self.ffprobe_path,
            "-v", "error",
            "-show_entries", "format=duration,format_name",
            "-of", "json",
            "-i", target,
            stdin=asyncio.subprocess.PIPE if data is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, _ = await proc.communicate(data)
        except asyncio.CancelledError:
            proc.kill()
            await proc.wait()
            raise

        if proc.returncode != 0:
            return None
        return self._parse(stdout)

    @staticmethod
    def _parse(output: bytes) -> Optional[MediaMetadata]:
        try:
            fmt = json.loads(output or b"{}").get("format") or {}
        except ValueError:
            return None

        duration = None
        try:
            seconds = float(fmt.get("duration"))
            if seconds > 0:
                duration = timedelta(seconds=seconds)
        except (TypeError, ValueError):
            pass

        mime_type = FFPROBE_FORMAT_TYPES.get(fmt.get("format_name", ""))
        if duration is None and mime_type is None:
            return None
        return MediaMetadata(mime_type=mime_type, duration=duration)


async def fetch_metadata_from_bytes(
    extractor: MetadataExtractor,
    data: bytes,
    file_name: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Optional[MediaMetadata]:
    """Run ``extractor`` on ``data`` with a time bound.

    Failures and timeouts are logged and reported as None so that callers
    can carry on with whatever they already knew.
    """
    return await _bounded(extractor.extract_from_bytes(data, file_name), file_name, timeout)


async def fetch_metadata_from_file(
    extractor: MetadataExtractor,
    path: str,
    timeout: Optional[float] = None,
) -> Optional[MediaMetadata]:
    """File counterpart of ``fetch_metadata_from_bytes``."""
    return await _bounded(extractor.extract_from_file(path), path, timeout)


async def _bounded(extraction, label: Optional[str], timeout: Optional[float]):
    if timeout is None:
        timeout = settings.METADATA_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(extraction, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Metadata extraction timed out after {timeout}s for {label!r}")
    except Exception as e:
        logger.warning(f"Metadata extraction failed for {label!r}: {e}")
    return None
