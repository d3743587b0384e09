"""Platform collaborators: file I/O facade and the process-wide registry.

The sources never touch the filesystem, the type classifier or the metadata
extractor directly; they go through ``PlatformUtils.instance()``. Applications
select implementations once at start-up with ``PlatformUtils.configure``.
"""

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from media_source.utils.file_util import MimeTypeClassifier, TypeClassifier
from media_source.utils.logger import logger
from media_source.utils.metadata import FfprobeMetadataExtractor, MetadataExtractor


@dataclass(frozen=True)
class PlatformFile:
    """Handle to a file on the platform: a path plus an optional MIME hint."""

    path: str
    mime_type: Optional[str] = None

    @property
    def name(self) -> str:
        return Path(self.path).name


class PlatformFileFacade(ABC):
    """Narrow async interface for the file operations sources need."""

    # When True, files are classified from their content instead of their path
    classify_from_bytes: bool = False

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if a file exists at ``path``. Never raises."""

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Delete the file at ``path``.

        Returns:
            True if a file was deleted, False if it was missing or the
            deletion failed. Never raises.
        """

    @abstractmethod
    async def ensure_directory(self, file_path: str) -> None:
        """Create the parent directory of ``file_path`` if missing."""

    @abstractmethod
    async def read(self, path: str) -> bytes:
        """Read the whole file.

        Raises:
            OSError: If the file is missing or unreadable.
        """

    @abstractmethod
    async def write(self, path: str, data: bytes) -> None:
        """Write ``data`` to ``path``, replacing any existing file."""

    @abstractmethod
    async def length(self, path: str) -> int:
        """Return the file size in bytes.

        Raises:
            OSError: If the file is missing or cannot be stat'ed.
        """

    async def copy(self, source: str, destination: str) -> None:
        """Copy ``source`` to ``destination``."""
        await self.write(destination, await self.read(source))


class LocalPlatformFacade(PlatformFileFacade):
    """Facade over the local filesystem."""

    async def exists(self, path: str) -> bool:
        if not path:
            return False
        try:
            return Path(path).is_file()
        except OSError:
            return False

    async def delete(self, path: str) -> bool:
        try:
            if not await self.exists(path):
                return False
            Path(path).unlink()
            return True
        except OSError as e:
            logger.warning(f"Could not delete file {path}: {e}")
            return False

    async def ensure_directory(self, file_path: str) -> None:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    async def read(self, path: str) -> bytes:
        return Path(path).read_bytes()

    async def write(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    async def length(self, path: str) -> int:
        return Path(path).stat().st_size

    async def copy(self, source: str, destination: str) -> None:
        shutil.copyfile(source, destination)


@dataclass
class Platform:
    """The collaborators currently in use."""

    facade: PlatformFileFacade
    classifier: TypeClassifier
    metadata_extractor: MetadataExtractor


class PlatformUtils:
    """Process-wide holder for the active ``Platform``."""

    _instance: Optional[Platform] = None

    @classmethod
    def instance(cls) -> Platform:
        if cls._instance is None:
            cls._instance = cls._default()
        return cls._instance

    @classmethod
    def configure(
        cls,
        facade: Optional[PlatformFileFacade] = None,
        classifier: Optional[TypeClassifier] = None,
        metadata_extractor: Optional[MetadataExtractor] = None,
    ) -> Platform:
        """Swap any of the collaborators; the others are kept."""
        current = cls.instance()
        cls._instance = Platform(
            facade=facade or current.facade,
            classifier=classifier or current.classifier,
            metadata_extractor=metadata_extractor or current.metadata_extractor,
        )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Restore the default collaborators."""
        cls._instance = None

    @staticmethod
    def _default() -> Platform:
        return Platform(
            facade=LocalPlatformFacade(),
            classifier=MimeTypeClassifier(),
            metadata_extractor=FfprobeMetadataExtractor(),
        )
