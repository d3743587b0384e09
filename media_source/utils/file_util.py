"""MIME type lookup for paths and byte buffers."""

import io
import mimetypes
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlsplit

from PIL import Image, UnidentifiedImageError

from media_source.config.constants import (
    BYTE_SIGNATURES,
    EXTRA_EXTENSION_TYPES,
    FTYP_BRANDS,
    FTYP_DEFAULT_MIME,
    RIFF_FORMATS,
)


def get_file_name_from_path(path: str) -> str:
    """Return the last ``/``-separated segment of ``path``."""
    return path.split("/")[-1]


class TypeClassifier(ABC):
    """Derives a MIME type from a path or a byte prefix."""

    @abstractmethod
    def classify_from_path(
        self, path: str, mime_hint: Optional[str] = None
    ) -> Optional[str]:
        """Return the MIME type for ``path``, or None if unknown."""

    @abstractmethod
    def classify_from_bytes(
        self, data: bytes, mime_hint: Optional[str] = None
    ) -> Optional[str]:
        """Return the MIME type for a byte buffer, or None if unknown."""


class MimeTypeClassifier(TypeClassifier):
    """Default classifier.

    Extensions are looked up in the stdlib ``mimetypes`` defaults (system
    mime.types files are ignored so results do not vary per host). Byte
    buffers are matched against a signature table, with Pillow as the
    fallback for image formats the table does not list.
    """

    def __init__(self):
        self._types = mimetypes.MimeTypes()
        for extension, mime_type in EXTRA_EXTENSION_TYPES.items():
            self._types.add_type(mime_type, extension)

    def classify_from_path(
        self, path: str, mime_hint: Optional[str] = None
    ) -> Optional[str]:
        if mime_hint:
            return mime_hint
        if not path:
            return None
        if "://" in path:
            path = urlsplit(path).path
        mime_type, _ = self._types.guess_type(path, strict=False)
        return mime_type

    def classify_from_bytes(
        self, data: bytes, mime_hint: Optional[str] = None
    ) -> Optional[str]:
        if mime_hint:
            return mime_hint
        if not data:
            return None

        for offset, signature, mime_type in BYTE_SIGNATURES:
            if data[offset:offset + len(signature)] == signature:
                return mime_type

        if data[:4] == b"RIFF" and data[8:12] in RIFF_FORMATS:
            return RIFF_FORMATS[data[8:12]]

        if data[4:8] == b"ftyp":
            return FTYP_BRANDS.get(data[8:12], FTYP_DEFAULT_MIME)

        return self._classify_image(data)

    @staticmethod
    def _classify_image(data: bytes) -> Optional[str]:
        try:
            with Image.open(io.BytesIO(data)) as img:
                return Image.MIME.get(img.format)
        except (UnidentifiedImageError, OSError, ValueError):
            return None
