"""Base exception classes for media-source."""


class MediaSourceError(Exception):
    """
    Base exception for all media-source errors.

    All custom exceptions in the library should inherit from this class
    to enable consistent error handling and catching.
    """

    pass
