"""Pytest configuration and fixtures."""

import asyncio
from typing import Optional

import pytest
from dotenv import load_dotenv

# Load test environment variables before importing any library code
load_dotenv(".env.test", override=True)

from media_source.exceptions import AssetNotFoundError  # noqa: E402
from media_source.sources.asset_source import BundleLoader  # noqa: E402
from media_source.utils.metadata import MediaMetadata, MetadataExtractor  # noqa: E402
from media_source.utils.platform_utils import PlatformUtils  # noqa: E402

# Minimal byte prefixes recognised by the default classifier
PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A]) + b"\x00" * 8
JPEG_BYTES = bytes([0xFF, 0xD8, 0xFF, 0xE0]) + b"\x00" * 12
MP3_BYTES = b"ID3\x03\x00\x00\x00\x00\x00\x00" + b"\x00" * 22
MP4_BYTES = b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 16
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
UNKNOWN_BYTES = b"#!/bin/sh\n"


class FakeMetadataExtractor(MetadataExtractor):
    """Metadata extractor returning a fixed result and recording calls."""

    def __init__(
        self,
        result: Optional[MediaMetadata] = None,
        delay: float = 0,
        error: Optional[Exception] = None,
    ):
        self.result = result
        self.delay = delay
        self.error = error
        self.calls = []

    async def extract_from_bytes(self, data, file_name=None):
        self.calls.append(("bytes", file_name))
        return await self._respond()

    async def extract_from_file(self, path):
        self.calls.append(("file", path))
        return await self._respond()

    async def _respond(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class MemoryBundleLoader(BundleLoader):
    """Bundle serving assets from a dict and counting loads."""

    def __init__(self, assets: dict):
        self.assets = assets
        self.load_count = 0

    async def load(self, asset_path):
        self.load_count += 1
        if asset_path not in self.assets:
            raise AssetNotFoundError(asset_path=asset_path)
        return self.assets[asset_path]


@pytest.fixture
def metadata_extractor():
    """Fake extractor installed in place of ffprobe for every test."""
    return FakeMetadataExtractor()


@pytest.fixture(autouse=True)
def platform(metadata_extractor):
    """Default platform with the fake extractor; restored after each test."""
    PlatformUtils.reset()
    configured = PlatformUtils.configure(metadata_extractor=metadata_extractor)
    yield configured
    PlatformUtils.reset()


@pytest.fixture
def bundle():
    return MemoryBundleLoader(
        {
            "assets/photo.png": PNG_BYTES,
            "assets/clip.mp4": MP4_BYTES,
            "assets/song.mp3": MP3_BYTES,
            "assets/manual.pdf": PDF_BYTES,
            "assets/run.sh": UNKNOWN_BYTES,
        }
    )


@pytest.fixture
def media_dir(tmp_path):
    """Directory with one sample file per media kind."""
    samples = {
        "photo.png": PNG_BYTES,
        "clip.mp4": MP4_BYTES,
        "song.mp3": MP3_BYTES,
        "manual.pdf": PDF_BYTES,
        "run.sh": UNKNOWN_BYTES,
    }
    for name, data in samples.items():
        (tmp_path / name).write_bytes(data)
    return tmp_path
