"""Tests for media kinds and type variants."""

from datetime import timedelta

import pytest

from media_source.media_type import (
    AudioType,
    DocumentType,
    DurationMedia,
    FileType,
    ImageType,
    MediaKind,
    OtherType,
    UrlType,
    VideoType,
)
from conftest import JPEG_BYTES, MP3_BYTES, MP4_BYTES, PDF_BYTES, PNG_BYTES, UNKNOWN_BYTES


@pytest.mark.unit
class TestMediaKindFromMime:
    """Substring rules applied to MIME strings."""

    @pytest.mark.parametrize(
        "mime_type,expected",
        [
            ("image/png", MediaKind.IMAGE),
            ("audio/mpeg", MediaKind.AUDIO),
            ("video/mp4", MediaKind.VIDEO),
            ("application/vnd.apple.mpegurl", MediaKind.VIDEO),
            ("application/x-mpegURL", MediaKind.VIDEO),
            ("application/pdf", MediaKind.DOCUMENT),
            ("application/zip", MediaKind.OTHER),
            ("text/plain", MediaKind.OTHER),
        ],
    )
    def test_classifies_by_substring(self, mime_type, expected):
        assert MediaKind.from_mime(mime_type) is expected

    def test_none_is_other(self):
        assert MediaKind.from_mime(None) is MediaKind.OTHER

    def test_empty_is_other(self):
        assert MediaKind.from_mime("") is MediaKind.OTHER


@pytest.mark.unit
class TestMediaKindFromPath:
    """Classification of paths and URLs."""

    def test_detects_image(self):
        assert MediaKind.from_path("test.jpg") is MediaKind.IMAGE

    def test_detects_video(self):
        assert MediaKind.from_path("test.mp4") is MediaKind.VIDEO

    def test_detects_audio(self):
        assert MediaKind.from_path("test.mp3") is MediaKind.AUDIO

    def test_detects_document(self):
        assert MediaKind.from_path("test.pdf") is MediaKind.DOCUMENT

    def test_unknown_extension_is_other(self):
        assert MediaKind.from_path("test.unknownext") is MediaKind.OTHER

    def test_no_extension_is_other(self):
        assert MediaKind.from_path("README") is MediaKind.OTHER

    def test_explicit_mime_wins_over_extension(self):
        assert MediaKind.from_path("test.unknown", "image/png") is MediaKind.IMAGE
        assert MediaKind.from_path("test.mp3", "video/mp4") is MediaKind.VIDEO

    def test_hls_playlist_is_video(self):
        assert MediaKind.from_path("stream.m3u8") is MediaKind.VIDEO

    def test_smooth_streaming_manifest_is_video(self):
        assert MediaKind.from_path("test.ism/manifest") is MediaKind.VIDEO

    def test_smooth_streaming_check_beats_mime(self):
        assert MediaKind.from_path("movie.ism/Manifest", "text/xml") is MediaKind.VIDEO

    def test_smooth_streaming_substring_false_positive(self):
        """Known heuristic flaw: any path containing "ism" is video."""
        assert MediaKind.from_path("charisma.mp3") is MediaKind.VIDEO

    def test_url_with_query_string(self):
        assert MediaKind.from_path("https://cdn.example.com/a/b.png?w=200") is MediaKind.IMAGE


@pytest.mark.unit
class TestMediaKindFromBytes:
    """Classification of byte buffers."""

    def test_png_signature_without_hint(self):
        data = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])
        assert MediaKind.from_bytes(data) is MediaKind.IMAGE

    def test_png_with_mime_hint(self):
        assert MediaKind.from_bytes(PNG_BYTES, "image/png") is MediaKind.IMAGE

    def test_jpeg_signature(self):
        assert MediaKind.from_bytes(JPEG_BYTES) is MediaKind.IMAGE

    def test_mp3_signature(self):
        assert MediaKind.from_bytes(MP3_BYTES) is MediaKind.AUDIO

    def test_mp4_signature(self):
        assert MediaKind.from_bytes(MP4_BYTES) is MediaKind.VIDEO

    def test_pdf_signature(self):
        assert MediaKind.from_bytes(PDF_BYTES) is MediaKind.DOCUMENT

    def test_unknown_bytes_are_other(self):
        assert MediaKind.from_bytes(UNKNOWN_BYTES) is MediaKind.OTHER

    def test_empty_bytes_are_other(self):
        assert MediaKind.from_bytes(b"") is MediaKind.OTHER

    def test_mime_hint_wins_over_signature(self):
        assert MediaKind.from_bytes(PNG_BYTES, "audio/mpeg") is MediaKind.AUDIO


@pytest.mark.unit
class TestFileTypeVariants:
    """Value semantics of the type variants."""

    def test_kinds(self):
        assert VideoType().kind is MediaKind.VIDEO
        assert AudioType().kind is MediaKind.AUDIO
        assert ImageType().kind is MediaKind.IMAGE
        assert DocumentType().kind is MediaKind.DOCUMENT
        assert UrlType().kind is MediaKind.URL
        assert OtherType().kind is MediaKind.OTHER

    def test_equal_by_value(self):
        assert ImageType() == ImageType()
        assert VideoType(timedelta(seconds=3)) == VideoType(timedelta(seconds=3))

    def test_duration_participates_in_equality(self):
        assert AudioType(timedelta(seconds=1)) != AudioType(timedelta(seconds=2))
        assert AudioType() != AudioType(timedelta(seconds=2))

    def test_different_kinds_not_equal(self):
        assert ImageType() != DocumentType()
        assert VideoType() != AudioType()

    def test_hashable(self):
        assert len({ImageType(), ImageType(), VideoType(), VideoType()}) == 2

    def test_immutable(self):
        video = VideoType(timedelta(seconds=1))
        with pytest.raises(AttributeError):
            video.duration = timedelta(seconds=2)

    def test_only_audio_and_video_have_duration(self):
        assert isinstance(VideoType(), DurationMedia)
        assert isinstance(AudioType(), DurationMedia)
        for variant in (ImageType(), DocumentType(), UrlType(), OtherType()):
            assert not isinstance(variant, DurationMedia)
            assert not hasattr(variant, "duration")

    def test_duration_defaults_to_none(self):
        assert VideoType().duration is None
        assert AudioType().duration is None

    @pytest.mark.parametrize(
        "kind,expected",
        [
            (MediaKind.VIDEO, VideoType(timedelta(seconds=5))),
            (MediaKind.AUDIO, AudioType(timedelta(seconds=5))),
            (MediaKind.IMAGE, ImageType()),
            (MediaKind.DOCUMENT, DocumentType()),
            (MediaKind.URL, UrlType()),
            (MediaKind.OTHER, OtherType()),
        ],
    )
    def test_from_kind(self, kind, expected):
        assert FileType.from_kind(kind, timedelta(seconds=5)) == expected

    def test_is_any(self):
        assert ImageType().is_any([MediaKind.IMAGE, MediaKind.VIDEO])
        assert not DocumentType().is_any([MediaKind.IMAGE])
        assert MediaKind.AUDIO.is_any([MediaKind.AUDIO])


@pytest.mark.unit
class TestFileTypeFold:
    """Exhaustive dispatch over type variants."""

    def test_calls_matching_handler(self):
        result = ImageType().fold(image=lambda _: "image", or_else=lambda: "other")
        assert result == "image"

    def test_passes_the_variant(self):
        video = VideoType(timedelta(seconds=7))
        assert video.fold(video=lambda v: v.duration, or_else=lambda: None) == timedelta(seconds=7)

    def test_each_kind(self):
        handlers = dict(
            image=lambda _: "image",
            audio=lambda _: "audio",
            video=lambda _: "video",
            document=lambda _: "document",
            url=lambda _: "url",
            or_else=lambda: "other",
        )
        assert AudioType().fold(**handlers) == "audio"
        assert VideoType().fold(**handlers) == "video"
        assert DocumentType().fold(**handlers) == "document"
        assert UrlType().fold(**handlers) == "url"
        assert OtherType().fold(**handlers) == "other"

    def test_falls_back_when_no_handler_matches(self):
        result = ImageType().fold(audio=lambda _: "audio", or_else=lambda: "other")
        assert result == "other"
