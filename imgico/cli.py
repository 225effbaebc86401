"""
Command line front end: convert an image file into a multi-size icon.

Example:
    imgico logo.png -o logo.ico --sizes 16,32,48,256 --list
"""
import argparse
import sys
from pathlib import Path

from imgico import __version__
from imgico.config import DEFAULT_OUTPUT_NAME, DEFAULT_SIZES, SUPPORTED_EXTENSIONS
from imgico.errors import IcoError
from imgico.ico import create_ico
from imgico.io import import_image, save_ico
from imgico.preview import describe_ico, load_preview
from imgico.logger import get_logger, get_log_file, get_recent_logs

logger = get_logger()


def parse_sizes(text: str):
    """Parse ``"16,32,48x24"`` into ``[(16, 16), (32, 32), (48, 24)]``."""
    sizes = []
    for item in text.split(','):
        item = item.strip().lower()
        if not item:
            continue
        try:
            if 'x' in item:
                width, height = item.split('x', 1)
                sizes.append((int(width), int(height)))
            else:
                sizes.append((int(item), int(item)))
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid size '{item}', expected N or WxH")
    if not sizes:
        raise argparse.ArgumentTypeError("at least one size is required")
    return sizes


def build_parser():
    parser = argparse.ArgumentParser(prog='imgico', description='Convert an image into a multi-size Windows ICO file')
    parser.add_argument('input', help='Path to the source image')
    parser.add_argument('-o', '--output', help='Output .ico path or directory (default: input path with .ico suffix)')
    parser.add_argument('--sizes', type=parse_sizes, default=list(DEFAULT_SIZES),
                        help='Comma-separated sizes, N or WxH, each 1-256 (default: 16,32,48)')
    parser.add_argument('--list', action='store_true', help='Print the directory of the written icon')
    parser.add_argument('--preview', help='Also write the largest icon image as PNG to this path')
    parser.add_argument('--show-log', type=int, metavar='N', help='Print the last N log lines when done')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix('.ico')
    if output_path.is_dir():
        output_path = output_path / DEFAULT_OUTPUT_NAME
    if input_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        logger.warning(f"Unusual input extension '{input_path.suffix}', trying to decode anyway")

    try:
        source = import_image(input_path)
        data = create_ico(source, args.sizes)
        save_ico(data, output_path)

        if args.list:
            print('\n'.join(describe_ico(data)))
        if args.preview:
            preview_path = Path(args.preview)
            preview_path.parent.mkdir(parents=True, exist_ok=True)
            load_preview(data).save(preview_path, format='PNG')
            logger.info(f"Preview saved: {preview_path}")
        status = 0
    except (IcoError, OSError, ValueError) as e:
        logger.error(f"Conversion failed: {e}")
        log_file = get_log_file()
        if log_file is not None:
            print(f"See log file for details: {log_file}", file=sys.stderr)
        status = 1

    if args.show_log:
        print(get_recent_logs(args.show_log), end='')
    return status


if __name__ == '__main__':
    sys.exit(main())
