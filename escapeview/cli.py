"""Command-line interface: python -m escapeview [options]."""

import logging
from argparse import ArgumentParser

from .app import run
from .colormaps import list_palette_names
from .config import BACKENDS, ZOOM_POLICIES, ConfigurationError, load_settings


def build_parser():
    parser = ArgumentParser(prog='escapeview',
                            description='Interactive Mandelbrot set explorer.')

    parser.add_argument('--settings', type=str, dest='settings_path',
                        help='JSON file with settings merged over the packaged defaults',
                        metavar='PATH')

    parser.add_argument('--width', type=int, help='initial window width in pixels',
                        metavar='WIDTH', default=None)

    parser.add_argument('--height', type=int, help='initial window height in pixels',
                        metavar='HEIGHT', default=None)

    parser.add_argument('--max-iter', type=int, dest='max_iter',
                        help='iteration budget per pixel (default 2048)',
                        metavar='MAX_ITER')

    parser.add_argument('--bailout', type=float,
                        help='escape radius; 16 for accurate smoothing, 2 for the minimal variant',
                        metavar='RADIUS')

    parser.add_argument('--palette', choices=list_palette_names(),
                        help='palette used for escaped points')

    parser.add_argument('--sqrt-passes', type=int, choices=(1, 2), dest='sqrt_passes',
                        help='square-root compressions applied before the palette')

    parser.add_argument('--zoom-policy', choices=ZOOM_POLICIES, dest='zoom_policy',
                        help='"anchored" zooms about the cursor, "unanchored" about the center')

    parser.add_argument('--backend', choices=BACKENDS,
                        help='parallel render backend')

    parser.add_argument('--workers', type=int,
                        help='number of render workers (default: all cores)')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')

    return parser


def parse_settings(argv=None):
    """
    Parse command-line arguments into (settings, width, height, verbose).

    Raises:
        ConfigurationError for invalid combinations of values
    """
    args = build_parser().parse_args(argv)
    settings = load_settings(args.settings_path).updated(
        max_iter=args.max_iter,
        bailout=args.bailout,
        palette=args.palette,
        sqrt_passes=args.sqrt_passes,
        zoom_policy=args.zoom_policy,
        backend=args.backend,
        workers=args.workers,
    )
    return settings, args.width, args.height, args.verbose


def main(argv=None):
    try:
        settings, width, height, verbose = parse_settings(argv)
    except ConfigurationError as e:
        build_parser().error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    run(settings, width, height)
