# -*- coding: utf-8 -*-
"""Batch-export watermarked images.

- Files are processed one at a time; a failing file is logged and skipped
- Output keeps the source file name and its native format
- EXIF is carried over for formats that store it (JPEG, WebP)
- The result is encoded in memory first, so no partial file is left behind
"""
from __future__ import annotations
import io
import logging
import os
import struct
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import piexif
from PIL import Image

from .composer import ImageWatermark, TextWatermark, Watermark, compose_watermark
from .errors import CompositeError, ImageReadError, OverlayError, WatermarkError
from .image_loader import DEFAULT_FILTER

logger = logging.getLogger(__name__)

EXIF_FORMATS = {'JPEG', 'WEBP'}
LOSSY_QUALITY = 80


@dataclass
class WatermarkSettings:
    input_dir: str
    output_dir: str = './watermarked'
    watermark_path: Optional[str] = None
    text: Optional[str] = None
    position: str = 'bottomright'
    opacity: float = 0.5
    scale: float = 0.2
    pattern: str = DEFAULT_FILTER


def make_watermark(settings: WatermarkSettings) -> Watermark:
    if settings.text:
        return TextWatermark(settings.text)
    if settings.watermark_path:
        return ImageWatermark(settings.watermark_path)
    raise WatermarkError('Either a watermark image (-w) or text (-t) must be provided')


def _check_readable(path: str) -> None:
    if not os.access(path, os.R_OK):
        raise ImageReadError(f'Error: Cannot access file {path}')
    if not os.path.isfile(path):
        raise ImageReadError(f'Error: {path} is not a file')
    if os.path.getsize(path) == 0:
        raise ImageReadError(f'Error: {path} is empty')


def _read_exif(path: str) -> Optional[bytes]:
    try:
        exif_dict = piexif.load(path)
    except (ValueError, struct.error, piexif.InvalidImageDataError):
        return None
    if not any(exif_dict.get(k) for k in ('0th', 'Exif', 'GPS', '1st')):
        return None
    try:
        return piexif.dump(exif_dict)
    except (ValueError, KeyError, TypeError):
        return None


def encode_image(img: Image.Image, fmt: str, *, has_alpha: bool, exif: Optional[bytes] = None) -> bytes:
    """Encode `img` as `fmt`, dropping alpha where the source had none."""
    fmt = (fmt or 'PNG').upper()
    save_kwargs = {}
    if fmt == 'JPEG' or not has_alpha:
        img = img.convert('RGB')
    if fmt in ('JPEG', 'WEBP'):
        save_kwargs['quality'] = LOSSY_QUALITY
    if exif and fmt in EXIF_FORMATS:
        save_kwargs['exif'] = exif
    buf = io.BytesIO()
    img.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


def process_image(path: str, settings: WatermarkSettings, watermark: Watermark) -> bool:
    """Watermark one file. Returns True on success; errors are logged."""
    filename = os.path.basename(path)
    out_path = os.path.join(settings.output_dir, filename)
    logger.info('Processing: %s', filename)
    try:
        _check_readable(path)
        try:
            base = Image.open(path)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageReadError(f'Error reading metadata for {filename}: {e}') from e
        with base:
            W, H = base.size
            if not W or not H:
                raise ImageReadError(f'Error: Invalid image dimensions for {filename}')
            logger.info('Image dimensions: %dx%d', W, H)
            fmt = base.format
            has_alpha = base.mode in ('RGBA', 'LA', 'PA') or 'transparency' in base.info

            try:
                wm = watermark.build(W, H, settings.scale)
            except OverlayError:
                raise
            except Exception as e:
                raise OverlayError(f'Error creating watermark: {e}') from e

            try:
                out = compose_watermark(base, wm, position=settings.position, opacity=settings.opacity)
                exif = _read_exif(path) if fmt in EXIF_FORMATS else None
                data = encode_image(out, fmt, has_alpha=has_alpha, exif=exif)
            except (CompositeError, OSError, ValueError) as e:
                raise CompositeError(f'Error applying watermark to {filename}: {e}') from e

        with open(out_path, 'wb') as f:
            f.write(data)
    except WatermarkError as e:
        logger.error('%s', e)
        return False
    except Exception as e:
        logger.error('Error processing %s: %s', filename, e)
        return False
    logger.info('Successfully processed: %s', filename)
    return True


def export_batch(image_paths: Iterable[str], settings: WatermarkSettings) -> Tuple[int, int]:
    """Watermark every path in order.

    Returns (success_count, fail_count).
    """
    os.makedirs(settings.output_dir, exist_ok=True)
    watermark = make_watermark(settings)
    ok, fail = 0, 0
    for p in image_paths:
        if process_image(p, settings, watermark):
            ok += 1
        else:
            fail += 1
    return ok, fail
