"""
ICO container codec: pack decoded RGBA images into a .ico and parse them back out.

Layout (all little-endian):
  header     6 bytes   reserved=0, type=1, count
  directory  16 bytes  per image: w, h, palette, reserved, planes, bpp, size, offset
  blocks     per image: BITMAPINFOHEADER (40 bytes) + bottom-up BGRA pixels
Width/height of 256 are stored as 0 in the directory. The bitmap header height is
doubled (XOR image + AND mask convention); we write no AND mask.
"""
from __future__ import annotations

import logging
import struct
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Sequence

from emojico.errors import (
    DimensionOutOfRange,
    EmptyInput,
    InvalidFormat,
    MalformedHeader,
    TruncatedData,
)
from emojico.pixels import BYTES_PER_PIXEL, from_bitmap, to_bitmap

log = logging.getLogger(__name__)

ICON_TYPE = 1

_HEADER = struct.Struct("<HHH")
_ENTRY = struct.Struct("<BBBBHHII")
_BITMAP = struct.Struct("<IiiHHIIiiII")

HEADER_SIZE = _HEADER.size      # 6
ENTRY_SIZE = _ENTRY.size        # 16
BITMAP_HEADER_SIZE = _BITMAP.size  # 40

MAX_COUNT = 0xFFFF
MAX_OFFSET = 0xFFFFFFFF


class DecodedImage(NamedTuple):
    """Raw image: row-major, top-down RGBA pixels."""
    width: int
    height: int
    pixels: bytes
    bytes_per_pixel: int = BYTES_PER_PIXEL

    @property
    def bits_per_pixel(self) -> int:
        return self.bytes_per_pixel * 8


class IcoHeader(NamedTuple):
    reserved: int
    type: int
    count: int

    def pack(self) -> bytes:
        return _HEADER.pack(self.reserved, self.type, self.count)

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> "IcoHeader":
        return cls(*_HEADER.unpack_from(data, offset))


class IcoDirectoryEntry(NamedTuple):
    """One 16-byte directory record. width/height are the raw bytes (0 means 256)."""
    width: int
    height: int
    color_palette: int
    reserved: int
    color_planes: int
    bits_per_pixel: int
    data_size: int
    data_offset: int

    @property
    def logical_width(self) -> int:
        return self.width or 256

    @property
    def logical_height(self) -> int:
        return self.height or 256

    def pack(self) -> bytes:
        return _ENTRY.pack(*self)

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> "IcoDirectoryEntry":
        return cls(*_ENTRY.unpack_from(data, offset))


class BitmapInfoHeader(NamedTuple):
    header_size: int
    width: int
    height: int
    color_planes: int
    bits_per_pixel: int
    compression: int
    image_data_size: int
    x_pixels_per_meter: int
    y_pixels_per_meter: int
    colors_used: int
    colors_important: int

    def pack(self) -> bytes:
        return _BITMAP.pack(*self)

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> "BitmapInfoHeader":
        return cls(*_BITMAP.unpack_from(data, offset))


def _directory_dimension(value: int, name: str) -> int:
    """Encode a dimension for the one-byte directory field: 256 -> 0, 1-255 as is."""
    if value == 256:
        return 0
    if 1 <= value <= 255:
        return value
    raise DimensionOutOfRange(f'{name} {value} cannot be stored in an ICO directory (1-256)')


def _validate(image: DecodedImage, index: int) -> None:
    if image.bytes_per_pixel != BYTES_PER_PIXEL:
        raise InvalidFormat(
            f'image {index}: expected {BYTES_PER_PIXEL} bytes per pixel, got {image.bytes_per_pixel}'
        )
    expected = image.width * image.height * image.bytes_per_pixel
    if len(image.pixels) != expected:
        raise InvalidFormat(
            f'image {index}: pixel buffer is {len(image.pixels)} bytes, '
            f'{image.width}x{image.height} RGBA needs {expected}'
        )
    _directory_dimension(image.width, 'width')
    _directory_dimension(image.height, 'height')


def _convert(image: DecodedImage) -> bytes:
    return to_bitmap(image.pixels, image.width, image.height, image.bytes_per_pixel)


def encode(images: Sequence[DecodedImage], workers: int | None = None) -> bytes:
    """
    Build an ICO container from images, in the given order.
    workers > 1 converts pixels in a thread pool; output bytes are identical either way.
    """
    images = list(images)
    if not images:
        raise EmptyInput('cannot build an ICO with no images')
    if len(images) > MAX_COUNT:
        raise InvalidFormat(f'an ICO holds at most {MAX_COUNT} images, got {len(images)}')
    for i, image in enumerate(images):
        _validate(image, i)
    total = HEADER_SIZE + ENTRY_SIZE * len(images) + sum(
        BITMAP_HEADER_SIZE + len(image.pixels) for image in images
    )
    if total > MAX_OFFSET:
        raise InvalidFormat(f'container would be {total} bytes; offsets are limited to 32 bits')

    if workers and workers > 1 and len(images) > 1:
        # map() yields in submission order, so blocks stay in input order.
        with ThreadPoolExecutor(max_workers=workers) as pool:
            converted = list(pool.map(_convert, images))
    else:
        converted = [_convert(image) for image in images]

    count = len(images)
    out = bytearray(IcoHeader(0, ICON_TYPE, count).pack())
    blocks = bytearray()
    offset = HEADER_SIZE + ENTRY_SIZE * count
    for image, data in zip(images, converted):
        bitmap = BitmapInfoHeader(
            BITMAP_HEADER_SIZE,
            image.width,
            image.height * 2,
            1,
            image.bits_per_pixel,
            0,
            len(data),
            0,
            0,
            0,
            0,
        )
        block_size = BITMAP_HEADER_SIZE + len(data)
        entry = IcoDirectoryEntry(
            _directory_dimension(image.width, 'width'),
            _directory_dimension(image.height, 'height'),
            0,
            0,
            1,
            image.bits_per_pixel,
            block_size,
            offset,
        )
        log.debug('entry %dx%d at offset %d, %d bytes', image.width, image.height, offset, block_size)
        out += entry.pack()
        blocks += bitmap.pack()
        blocks += data
        offset += block_size
    out += blocks
    return bytes(out)


def read_directory(data: bytes) -> tuple[IcoHeader, list[IcoDirectoryEntry]]:
    """Parse only the header and directory entries of an ICO container."""
    if len(data) < HEADER_SIZE:
        raise MalformedHeader(f'need at least {HEADER_SIZE} bytes for an ICO header, got {len(data)}')
    header = IcoHeader.unpack(data)
    if header.reserved != 0:
        raise MalformedHeader(f'reserved field is {header.reserved}, expected 0')
    if header.type != ICON_TYPE:
        raise MalformedHeader(f'type field is {header.type}, expected {ICON_TYPE} (icon)')
    end = HEADER_SIZE + ENTRY_SIZE * header.count
    if end > len(data):
        raise TruncatedData(f'directory of {header.count} entries needs {end} bytes, got {len(data)}')
    entries = [
        IcoDirectoryEntry.unpack(data, HEADER_SIZE + ENTRY_SIZE * i)
        for i in range(header.count)
    ]
    return header, entries


def _decode_block(data: bytes, entry: IcoDirectoryEntry, index: int) -> DecodedImage:
    start = entry.data_offset
    if start + entry.data_size > len(data):
        raise TruncatedData(
            f'image {index}: block at {start} of {entry.data_size} bytes runs past end ({len(data)})'
        )
    if entry.data_size < BITMAP_HEADER_SIZE:
        raise TruncatedData(f'image {index}: block of {entry.data_size} bytes has no room for a bitmap header')
    bitmap = BitmapInfoHeader.unpack(data, start)
    if bitmap.header_size != BITMAP_HEADER_SIZE:
        raise InvalidFormat(f'image {index}: unsupported bitmap header size {bitmap.header_size}')
    if bitmap.bits_per_pixel != BYTES_PER_PIXEL * 8 or bitmap.compression != 0:
        raise InvalidFormat(
            f'image {index}: only uncompressed 32-bit bitmaps are supported '
            f'(bpp={bitmap.bits_per_pixel}, compression={bitmap.compression})'
        )
    if bitmap.height % 2:
        raise InvalidFormat(f'image {index}: bitmap height {bitmap.height} is not doubled (odd)')
    width = bitmap.width
    height = bitmap.height // 2
    if (width, height) != (entry.logical_width, entry.logical_height):
        raise InvalidFormat(
            f'image {index}: directory says {entry.logical_width}x{entry.logical_height}, '
            f'bitmap header says {width}x{height}'
        )
    payload = data[start + BITMAP_HEADER_SIZE:start + entry.data_size]
    log.debug('image %d: %dx%d, %d payload bytes', index, width, height, len(payload))
    # from_bitmap raises InvalidFormat when the payload and dimensions disagree.
    pixels = from_bitmap(payload, width, height, BYTES_PER_PIXEL)
    return DecodedImage(width, height, pixels)


def decode(data: bytes) -> list[DecodedImage]:
    """Parse an ICO container into top-down RGBA images, in directory order."""
    _, entries = read_directory(data)
    return [_decode_block(data, entry, i) for i, entry in enumerate(entries)]
