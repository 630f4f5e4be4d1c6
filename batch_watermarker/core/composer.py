# -*- coding: utf-8 -*-
"""Build watermark overlays and composite them onto base images.

- Image watermarks are decoded once and resized per base image
- Text watermarks are rendered per base image (font size depends on it)
- Opacity scales the overlay alpha before "over" compositing
"""
from __future__ import annotations
import math
from typing import Optional, Tuple, Union

from PIL import Image

from .errors import CompositeError, OverlayError
from .placement import anchor_pos
from .text_overlay import MIN_BOX, render_text_watermark


def watermark_box(W: int, H: int, scale: float) -> Tuple[float, float]:
    """Largest overlay box allowed for a W x H image."""
    return max(MIN_BOX, W * scale), max(MIN_BOX, H * scale)


class ImageWatermark:
    def __init__(self, path: str):
        self.path = path
        self._source: Optional[Image.Image] = None

    def _load(self) -> Image.Image:
        if self._source is None:
            try:
                with Image.open(self.path) as img:
                    img.load()
                    self._source = img.convert('RGBA') if img.mode != 'RGBA' else img.copy()
            except (OSError, ValueError) as e:
                raise OverlayError(f'Error loading watermark image: {e}') from e
        return self._source

    def build(self, W: int, H: int, scale: float) -> Image.Image:
        wm = self._load()
        max_w, _ = watermark_box(W, H, scale)
        target_w = max(1, math.floor(max_w))
        ratio = target_w / wm.width
        target_h = max(1, int(math.floor(wm.height * ratio + 0.5)))
        return wm.resize((target_w, target_h), Image.LANCZOS)


class TextWatermark:
    def __init__(self, text: str):
        self.text = text

    def build(self, W: int, H: int, scale: float) -> Image.Image:
        box_w, box_h = watermark_box(W, H, scale)
        return render_text_watermark(self.text, box_w, box_h)


Watermark = Union[ImageWatermark, TextWatermark]


def apply_opacity(wm: Image.Image, opacity: float) -> Image.Image:
    if wm.mode != 'RGBA':
        wm = wm.convert('RGBA')
    if opacity >= 1.0:
        return wm
    r, g, b, a = wm.split()
    a = a.point(lambda v: int(v * opacity))
    return Image.merge('RGBA', (r, g, b, a))


def compose_watermark(
    base: Image.Image,
    wm: Image.Image,
    *,
    position: str,
    opacity: float,
) -> Image.Image:
    """Composite `wm` onto `base` at `position`, returning a new RGBA image."""
    W, H = base.size
    tw, th = wm.size
    if tw > W or th > H:
        raise CompositeError(
            f'Watermark {tw}x{th} does not fit inside image {W}x{H}'
        )
    left, top = anchor_pos(position, W, H, tw, th)
    img = base.convert('RGBA') if base.mode != 'RGBA' else base.copy()
    layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
    layer.paste(apply_opacity(wm, opacity), (math.floor(left), math.floor(top)))
    return Image.alpha_composite(img, layer)
