"""Entry point: build, inspect or extract .ico files."""

import argparse
import logging
import os
import sys

from emojico import IcoError, decode, encode, read_directory
from emojico.log_config import setup_logging
from emojico.raster import load_image, to_pil
from emojico.version import APPLE_TOUCH_SIZES, FAVICON_SIZES, __version__

log = logging.getLogger("emojico.main")


def _workers_from_env() -> int | None:
    value = os.environ.get("EMOJICO_WORKERS")
    if not value:
        return None
    try:
        return max(1, int(value))
    except ValueError:
        log.warning("Ignoring EMOJICO_WORKERS=%r (not an integer)", value)
        return None


def _parse_sizes(text: str) -> list[int]:
    try:
        sizes = [int(s) for s in text.split(',') if s.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid size list: {text!r}')
    for size in sizes:
        if not 1 <= size <= 256:
            raise argparse.ArgumentTypeError(f'size {size} out of range (1-256)')
    return sizes


def _write_pngs(source: str, sizes, out_dir: str, prefix: str) -> None:
    os.makedirs(out_dir, exist_ok=True)
    for size in sizes:
        path = os.path.join(out_dir, f'{prefix}-{size}x{size}.png')
        to_pil(load_image(source, size)).save(path, format='PNG')
        log.debug("Wrote %s", path)


def cmd_build(args) -> None:
    if args.sizes:
        if len(args.sources) > 1:
            log.warning("--sizes renders only %s; ignoring %d other source(s)",
                        args.sources[0], len(args.sources) - 1)
        images = [load_image(args.sources[0], size) for size in args.sizes]
    else:
        images = [load_image(path) for path in args.sources]
    data = encode(images, workers=_workers_from_env())
    out_dir = os.path.dirname(os.path.abspath(args.out))
    os.makedirs(out_dir, exist_ok=True)
    with open(args.out, 'wb') as f:
        f.write(data)
    log.info("Wrote %s (%d images, %d bytes)", args.out, len(images), len(data))
    if args.all:
        source = args.sources[0]
        _write_pngs(source, FAVICON_SIZES, os.path.join(out_dir, 'favicons'), 'favicon')
        _write_pngs(source, APPLE_TOUCH_SIZES, os.path.join(out_dir, 'apple-touch-icon'), 'apple-touch-icon')
        log.info("Wrote favicon and Apple touch icon PNGs to %s", out_dir)


def cmd_inspect(args) -> None:
    with open(args.file, 'rb') as f:
        data = f.read()
    header, entries = read_directory(data)
    print(f'{args.file}: {header.count} image(s)')
    for i, e in enumerate(entries):
        print(
            f'  [{i}] {e.logical_width}x{e.logical_height} {e.bits_per_pixel}bpp '
            f'offset={e.data_offset} size={e.data_size}'
        )


def cmd_extract(args) -> None:
    with open(args.file, 'rb') as f:
        data = f.read()
    images = decode(data)
    os.makedirs(args.dir, exist_ok=True)
    for image in images:
        path = os.path.join(args.dir, f'icon-{image.width}x{image.height}.png')
        to_pil(image).save(path, format='PNG')
        log.info("Wrote %s", path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='emojico', description='Build and inspect Windows .ico files.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug output on stderr')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('build', help='pack images into an .ico')
    p.add_argument('sources', nargs='+', help='source images (PNG or anything Pillow reads)')
    p.add_argument('-o', '--out', required=True, help='output .ico path')
    p.add_argument(
        '--sizes',
        type=_parse_sizes,
        help=f'render the first source at these sizes, e.g. {",".join(map(str, FAVICON_SIZES))}',
    )
    p.add_argument(
        '--all',
        action='store_true',
        help='also write favicons/ and apple-touch-icon/ PNGs next to the .ico',
    )
    p.set_defaults(func=cmd_build)

    p = sub.add_parser('inspect', help='list the images in an .ico')
    p.add_argument('file')
    p.set_defaults(func=cmd_inspect)

    p = sub.add_parser('extract', help='save each image in an .ico as PNG')
    p.add_argument('file')
    p.add_argument('-d', '--dir', default='.', help='output directory')
    p.set_defaults(func=cmd_extract)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    try:
        args.func(args)
    except (IcoError, OSError) as e:
        log.error("%s failed: %s", args.command, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
