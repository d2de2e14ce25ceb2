"""Convert between top-down RGBA and bottom-up BGRA (legacy bitmap pixel order)."""

from emojico.errors import InvalidFormat

BYTES_PER_PIXEL = 4


def _check(pixels: bytes, width: int, height: int, bytes_per_pixel: int) -> None:
    if bytes_per_pixel != BYTES_PER_PIXEL:
        raise InvalidFormat(f'expected {BYTES_PER_PIXEL} bytes per pixel, got {bytes_per_pixel}')
    if width < 0 or height < 0:
        raise InvalidFormat(f'negative dimensions {width}x{height}')
    expected = width * height * bytes_per_pixel
    if len(pixels) != expected:
        raise InvalidFormat(
            f'pixel buffer is {len(pixels)} bytes, {width}x{height}x{bytes_per_pixel} needs {expected}'
        )


def _flip_and_swap(pixels: bytes, width: int, height: int, bytes_per_pixel: int) -> bytes:
    _check(pixels, width, height, bytes_per_pixel)
    if not pixels:
        return b''
    stride = width * bytes_per_pixel
    out = bytearray(len(pixels))
    for row in range(height):
        src = row * stride
        dst = (height - 1 - row) * stride
        line = bytearray(pixels[src:src + stride])
        # Swap channel 0 and 2 of every pixel; 1 and 3 stay put.
        line[0::4], line[2::4] = line[2::4], line[0::4]
        out[dst:dst + stride] = line
    return bytes(out)


def to_bitmap(pixels: bytes, width: int, height: int, bytes_per_pixel: int = BYTES_PER_PIXEL) -> bytes:
    """Top-down RGBA -> bottom-up BGRA. Output has the same length as input."""
    return _flip_and_swap(pixels, width, height, bytes_per_pixel)


def from_bitmap(pixels: bytes, width: int, height: int, bytes_per_pixel: int = BYTES_PER_PIXEL) -> bytes:
    """Bottom-up BGRA -> top-down RGBA. Inverse of to_bitmap (the transform is its own inverse)."""
    return _flip_and_swap(pixels, width, height, bytes_per_pixel)
