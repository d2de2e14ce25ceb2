"""Pillow glue: turn PNG (or any Pillow-readable) images into DecodedImage and back."""

from __future__ import annotations

import io
import logging

from PIL import Image, ImageOps

from emojico.ico import DecodedImage

log = logging.getLogger(__name__)


def _from_pil(img: "Image.Image", size: int | None = None) -> DecodedImage:
    img = img.convert('RGBA')
    if size is not None and img.size != (size, size):
        # Fit inside a transparent square, keeping aspect ratio.
        fitted = ImageOps.contain(img, (size, size), Image.Resampling.LANCZOS)
        canvas = Image.new('RGBA', (size, size), (0, 0, 0, 0))
        canvas.paste(fitted, ((size - fitted.width) // 2, (size - fitted.height) // 2))
        img = canvas
    return DecodedImage(img.width, img.height, img.tobytes())


def decode_png(data: bytes) -> DecodedImage:
    """Decode compressed image bytes into top-down RGBA."""
    with Image.open(io.BytesIO(data)) as img:
        return _from_pil(img)


def load_image(path: str, size: int | None = None) -> DecodedImage:
    """Load an image file as RGBA; with size, fit it into a size x size transparent square."""
    with Image.open(path) as img:
        log.debug('loaded %s (%dx%d %s)', path, img.width, img.height, img.mode)
        return _from_pil(img, size)


def to_pil(image: DecodedImage) -> "Image.Image":
    return Image.frombytes('RGBA', (image.width, image.height), image.pixels)
