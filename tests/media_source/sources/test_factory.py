"""Tests for MediaSourceFactory."""

import pytest

from media_source.sources.asset_source import ImageAssetMedia
from media_source.sources.factory import MediaSourceFactory
from media_source.sources.file_source import VideoFileMedia
from media_source.sources.memory_source import ImageMemoryMedia
from media_source.sources.network_source import AudioNetworkMedia, UrlMedia
from conftest import PNG_BYTES


@pytest.fixture
def restore_creators():
    saved = dict(MediaSourceFactory._creators)
    yield
    MediaSourceFactory._creators = saved


@pytest.mark.unit
class TestMediaSourceFactory:
    """Test suite for MediaSourceFactory."""

    @pytest.mark.asyncio
    async def test_create_file_source(self, media_dir):
        """Test creating a file source from a path."""
        media = await MediaSourceFactory.create("file", str(media_dir / "clip.mp4"))

        assert isinstance(media, VideoFileMedia)

    @pytest.mark.asyncio
    async def test_create_memory_source(self):
        """Test creating a memory source from bytes."""
        media = await MediaSourceFactory.create("memory", PNG_BYTES, name="photo.png")

        assert isinstance(media, ImageMemoryMedia)
        assert media.name == "photo.png"

    @pytest.mark.asyncio
    async def test_create_network_source(self):
        """Test creating a network source from a URL."""
        media = await MediaSourceFactory.create("network", "https://x/song.mp3")

        assert isinstance(media, AudioNetworkMedia)

    @pytest.mark.asyncio
    async def test_create_asset_source(self, bundle):
        """Test creating an asset source with an explicit bundle."""
        media = await MediaSourceFactory.create("asset", "assets/photo.png", bundle=bundle)

        assert isinstance(media, ImageAssetMedia)

    @pytest.mark.asyncio
    async def test_create_unsupported_type(self):
        """Test creating a source with an unsupported type raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported media source type"):
            await MediaSourceFactory.create("ftp", "ftp://x/a.mp4")

    @pytest.mark.asyncio
    async def test_create_unsupported_type_lists_supported(self):
        """Test error message lists supported types."""
        with pytest.raises(ValueError, match="asset, file, memory, network"):
            await MediaSourceFactory.create("s3", "bucket/a.mp4")

    def test_supported_types(self):
        assert MediaSourceFactory.supported_types() == ["asset", "file", "memory", "network"]

    @pytest.mark.asyncio
    async def test_register_source(self, restore_creators):
        """Test registering a custom source type."""

        async def create_link(url, **kwargs):
            return UrlMedia(url)

        MediaSourceFactory.register_source("link", create_link)

        assert "link" in MediaSourceFactory.supported_types()
        media = await MediaSourceFactory.create("link", "https://example.com/post")
        assert media == UrlMedia("https://example.com/post")
