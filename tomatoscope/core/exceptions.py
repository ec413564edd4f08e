"""
Tomatoscope Exceptions

Every error raised by the library derives from `TomatoscopeError`, so callers
can catch the whole family at once or pick out the stage that failed.
"""
from typing import Optional


class TomatoscopeError(Exception):
    """Base class for all Tomatoscope errors."""


class ConfigurationError(TomatoscopeError, ValueError):
    """The API key is missing or a client setting is invalid."""


class URIConstructionError(TomatoscopeError):
    """A request target could not be built from the given path or parameters."""


class TransportError(TomatoscopeError):
    """
    The HTTP round trip failed: a network error or a non-success status.

    Attributes:
        uri (str, optional): The request target that failed.
        status_code (int, optional): The HTTP status, when a response was received.
    """

    def __init__(self, message: str, uri: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.uri = uri
        self.status_code = status_code


class MalformedResponseError(TomatoscopeError):
    """The response envelope is not valid JSON or lacks an expected field."""

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message)
        self.uri = uri


class MappingError(TomatoscopeError):
    """
    A single JSON item could not be converted into an entity.

    Batch calls never raise this; it travels inside a `MappingResult` and the
    item is dropped from the returned sequence.
    """
