"""Media source related exceptions."""

from typing import Optional

from media_source.exceptions.base import MediaSourceError


class InvalidMediaUrlError(MediaSourceError, ValueError):
    """A network media locator could not be parsed.

    Inherits from ValueError so callers treating it as bad input catch it.
    """

    def __init__(
        self,
        message: str = "Invalid media URL",
        url: Optional[object] = None,
    ):
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.url is not None:
            return f"{base}: {self.url!r}"
        return base


class MediaReadError(MediaSourceError, OSError):
    """Media content could not be read from its backing file."""

    def __init__(
        self,
        message: str = "Failed to read media content",
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        base = self.args[0] if self.args else ""
        if self.path:
            return f"{base} (path: {self.path})"
        return base


class AssetNotFoundError(MediaSourceError, FileNotFoundError):
    """Asset is not present in the bundle.

    Inherits from both MediaSourceError and FileNotFoundError so callers
    catching either type will handle it correctly.
    """

    def __init__(
        self,
        message: str = "Asset not found",
        asset_path: Optional[str] = None,
    ):
        super().__init__(message)
        self.asset_path = asset_path

    def __str__(self) -> str:
        base = self.args[0] if self.args else ""
        if self.asset_path:
            return f"{base}: {self.asset_path}"
        return base
