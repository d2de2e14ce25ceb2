"""emojico: build and parse Windows ICO containers from raw RGBA images."""

from emojico.errors import (
    DimensionOutOfRange,
    EmptyInput,
    IcoError,
    InvalidFormat,
    MalformedHeader,
    TruncatedData,
)
from emojico.ico import (
    DecodedImage,
    decode,
    encode,
    read_directory,
)
from emojico.pixels import from_bitmap, to_bitmap

__all__ = [
    'DecodedImage',
    'DimensionOutOfRange',
    'EmptyInput',
    'IcoError',
    'InvalidFormat',
    'MalformedHeader',
    'TruncatedData',
    'decode',
    'encode',
    'from_bitmap',
    'read_directory',
    'to_bitmap',
]
