"""Package version and icon size presets."""

__version__ = "1.0.0"

# Sizes bundled into favicon.ico
FAVICON_SIZES = (16, 32, 48)

# Apple touch icon sizes, written as separate PNGs by `build --all`
APPLE_TOUCH_SIZES = (57, 60, 72, 76, 114, 120, 144, 152, 180)
