# -*- coding: utf-8 -*-
"""Command line interface: watermark every image in a directory."""
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

from .core.exporter import WatermarkSettings, export_batch
from .core.image_loader import DEFAULT_FILTER, collect_images
from .core.placement import POSITIONS

logger = logging.getLogger(__name__)

VERSION = '1.0.0'


def _unit_float(value: str) -> float:
    """argparse type for a float in [0, 1], given as a string like '0.5'."""
    try:
        v = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")
    if not 0.0 <= v <= 1.0:
        raise argparse.ArgumentTypeError(f"'{value}' must be between 0 and 1")
    return v


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='batch-watermarker',
        description='Add watermarks to all images in a directory',
    )
    parser.add_argument('--version', action='version', version=VERSION)
    parser.add_argument('-i', '--input', required=True, metavar='DIRECTORY',
                        help='Input directory containing images')
    parser.add_argument('-o', '--output', default='./watermarked', metavar='DIRECTORY',
                        help='Output directory for watermarked images')
    parser.add_argument('-w', '--watermark', metavar='FILE', help='Path to watermark image')
    parser.add_argument('-t', '--text', help='Text to use as watermark')
    parser.add_argument('-p', '--position', default='bottomright',
                        help=f"Watermark position: {', '.join(POSITIONS)}")
    parser.add_argument('-a', '--opacity', type=_unit_float, default='0.5',
                        help='Watermark opacity (0-1)')
    parser.add_argument('-s', '--scale', type=_unit_float, default='0.2',
                        help='Watermark scale relative to image size (0-1)')
    parser.add_argument('-f', '--filter', default=DEFAULT_FILTER,
                        help='Image file extensions to process')
    parser.add_argument('--log-level', default='INFO',
                        choices=['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'],
                        help='Logging verbosity')
    return parser


def settings_from_args(args: argparse.Namespace) -> WatermarkSettings:
    return WatermarkSettings(
        input_dir=args.input,
        output_dir=args.output,
        watermark_path=args.watermark,
        text=args.text,
        position=args.position,
        opacity=args.opacity,
        scale=args.scale,
        pattern=args.filter,
    )


def run(settings: WatermarkSettings) -> int:
    logger.info('Searching for images in: %s', settings.input_dir)
    logger.info('Output directory: %s', settings.output_dir)

    images = collect_images(settings.input_dir, settings.pattern)
    if not images:
        logger.info('No images found matching the filter pattern.')
        return 0

    logger.info('Found %d images to process', len(images))
    ok, fail = export_batch(images, settings)
    logger.info('Done! Processed %d images', len(images))
    if fail:
        logger.info('%d succeeded, %d skipped', ok, fail)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(message)s',
        stream=sys.stdout,
    )

    if not os.path.isdir(args.input):
        logger.error('Error: Input directory "%s" does not exist', args.input)
        return 1
    if not args.watermark and not args.text:
        logger.error('Error: Either a watermark image (-w) or text (-t) must be provided')
        return 1
    if args.watermark and args.text:
        logger.error('Error: Provide either a watermark image (-w) or text (-t), not both')
        return 1

    settings = settings_from_args(args)
    try:
        os.makedirs(settings.output_dir, exist_ok=True)
        return run(settings)
    except Exception as e:
        logger.error('Error: %s', e)
        return 1

