"""Exceptions raised by the signing engine."""

from typing import Optional


class SigningError(ValueError):
    """Base class for every error raised while preparing a signature."""


class InvalidUrlError(SigningError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class MissingCredentialError(SigningError):
    # Only the field name is kept; credential values must not end up in tracebacks.
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required credential field: {field}")
        self.field = field


class EncodingError(SigningError):
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.__cause__ = cause
