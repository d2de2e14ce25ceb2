"""Errors raised while encoding or parsing ICO containers."""


class IcoError(ValueError):
    """Base class for all codec failures. Never retried; the whole call fails."""


class InvalidFormat(IcoError):
    """Pixel buffer does not match its declared dimensions or channel layout."""


class DimensionOutOfRange(IcoError):
    """Width or height cannot be stored in a one-byte directory field (1-255, or 256 as 0)."""


class EmptyInput(IcoError):
    """encode() was given no images."""


class MalformedHeader(IcoError):
    """Header reserved/type fields are not 0/1."""


class TruncatedData(IcoError):
    """A declared offset or size points past the end of the buffer."""
