"""Shared classification constants.

Tables used by the default type classifier and metadata extractor are
defined here so that both stay consistent.
"""

# Substring in a path that marks a smooth-streaming manifest
SMOOTH_STREAMING_MARKER = "ism"

# Fallback MIME type reported for a UrlMedia link
URL_MIME_TYPE = "url"

# Extensions missing from (or unstable in) the stdlib mimetypes defaults
EXTRA_EXTENSION_TYPES = {
    ".m3u8": "application/vnd.apple.mpegurl",
    ".mpd": "application/dash+xml",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".opus": "audio/opus",
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
}

# (offset, signature, mime_type) checked in order against a byte prefix
BYTE_SIGNATURES = [
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (0, b"BM", "image/bmp"),
    (0, b"%PDF", "application/pdf"),
    (0, b"ID3", "audio/mpeg"),
    (0, b"\xff\xfb", "audio/mpeg"),
    (0, b"\xff\xf3", "audio/mpeg"),
    (0, b"\xff\xf2", "audio/mpeg"),
    (0, b"OggS", "audio/ogg"),
    (0, b"fLaC", "audio/flac"),
    (0, b"\x1a\x45\xdf\xa3", "video/x-matroska"),
    (0, b"#EXTM3U", "application/vnd.apple.mpegurl"),
]

# RIFF containers: the format is the four bytes at offset 8
RIFF_FORMATS = {
    b"WEBP": "image/webp",
    b"WAVE": "audio/wav",
    b"AVI ": "video/x-msvideo",
}

# ISO base media (ftyp box at offset 4): major brand -> MIME type
FTYP_BRANDS = {
    b"M4A ": "audio/mp4",
    b"M4B ": "audio/mp4",
    b"qt  ": "video/quicktime",
    b"heic": "image/heic",
    b"avif": "image/avif",
}
FTYP_DEFAULT_MIME = "video/mp4"

# ffprobe format_name -> MIME type
FFPROBE_FORMAT_TYPES = {
    "mp3": "audio/mpeg",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "wav": "audio/wav",
    "aac": "audio/aac",
    "matroska,webm": "video/x-matroska",
    "mov,mp4,m4a,3gp,3g2,mj2": "video/mp4",
    "avi": "video/x-msvideo",
    "hls": "application/vnd.apple.mpegurl",
}
