"""Tests for the default MIME type classifier."""

import io

import pytest
from PIL import Image

from media_source.utils.file_util import MimeTypeClassifier, get_file_name_from_path
from conftest import MP3_BYTES, PDF_BYTES, PNG_BYTES


@pytest.fixture
def classifier():
    return MimeTypeClassifier()


@pytest.mark.unit
class TestClassifyFromPath:
    """Test suite for extension lookups."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("photo.jpg", "image/jpeg"),
            ("photo.JPG", "image/jpeg"),
            ("clip.mp4", "video/mp4"),
            ("song.mp3", "audio/mpeg"),
            ("manual.pdf", "application/pdf"),
            ("stream.m3u8", "application/vnd.apple.mpegurl"),
            ("movie.mkv", "video/x-matroska"),
            ("/abs/dir/voice.m4a", "audio/mp4"),
        ],
    )
    def test_known_extensions(self, classifier, path, expected):
        assert classifier.classify_from_path(path) == expected

    def test_unknown_extension(self, classifier):
        assert classifier.classify_from_path("file.unknownext") is None

    def test_empty_path(self, classifier):
        assert classifier.classify_from_path("") is None

    def test_hint_is_returned_as_is(self, classifier):
        assert classifier.classify_from_path("file.bin", "video/webm") == "video/webm"

    def test_url_query_is_ignored(self, classifier):
        assert classifier.classify_from_path("https://x.io/v/clip.mp4?token=abc#t=3") == "video/mp4"


@pytest.mark.unit
class TestClassifyFromBytes:
    """Test suite for byte-signature lookups."""

    def test_png(self, classifier):
        assert classifier.classify_from_bytes(PNG_BYTES) == "image/png"

    def test_mp3(self, classifier):
        assert classifier.classify_from_bytes(MP3_BYTES) == "audio/mpeg"

    def test_pdf(self, classifier):
        assert classifier.classify_from_bytes(PDF_BYTES) == "application/pdf"

    def test_riff_wave(self, classifier):
        data = b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 16
        assert classifier.classify_from_bytes(data) == "audio/wav"

    def test_riff_webp(self, classifier):
        data = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 16
        assert classifier.classify_from_bytes(data) == "image/webp"

    def test_ftyp_audio_brand(self, classifier):
        data = b"\x00\x00\x00\x20ftypM4A \x00\x00\x00\x00" + b"\x00" * 16
        assert classifier.classify_from_bytes(data) == "audio/mp4"

    def test_ftyp_unknown_brand_defaults_to_mp4(self, classifier):
        data = b"\x00\x00\x00\x20ftypmp42\x00\x00\x00\x00" + b"\x00" * 16
        assert classifier.classify_from_bytes(data) == "video/mp4"

    def test_image_fallback_through_pillow(self, classifier):
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), color="red").save(buffer, format="TIFF")
        assert classifier.classify_from_bytes(buffer.getvalue()) == "image/tiff"

    def test_unrecognised_bytes(self, classifier):
        assert classifier.classify_from_bytes(b"just some text") is None

    def test_empty_bytes(self, classifier):
        assert classifier.classify_from_bytes(b"") is None

    def test_hint_is_returned_as_is(self, classifier):
        assert classifier.classify_from_bytes(PNG_BYTES, "image/x-custom") == "image/x-custom"


@pytest.mark.unit
def test_get_file_name_from_path():
    assert get_file_name_from_path("/a/b/c.mp4") == "c.mp4"
    assert get_file_name_from_path("c.mp4") == "c.mp4"
    assert get_file_name_from_path("/a/b/") == ""
