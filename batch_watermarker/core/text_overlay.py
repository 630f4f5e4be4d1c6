# -*- coding: utf-8 -*-
"""Render a text watermark.

The text is first described as SVG sized to fit it, then rasterized with Qt's
SVG renderer (QtSvg) and handed to Pillow as an RGBA image with a soft shadow.
Font sizing is an empirical heuristic; keep the arithmetic as is so output
matches previously watermarked images.
"""
from __future__ import annotations
import logging
import math
import os
from dataclasses import dataclass
from typing import Optional
from xml.sax.saxutils import escape

from PIL import Image, ImageFilter, ImageQt
from PySide6.QtCore import QByteArray
from PySide6.QtGui import QGuiApplication, QImage, QPainter
from PySide6.QtSvg import QSvgRenderer

from .errors import OverlayError

logger = logging.getLogger(__name__)

MIN_BOX = 50
MIN_FONT_SIZE = 12
SHADOW_RADIUS = 2

_app: Optional[QGuiApplication] = None


@dataclass(frozen=True)
class TextLayout:
    font_size: float
    width: int
    height: int


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def text_layout(text: str, width: float, height: float) -> TextLayout:
    """Font size and SVG canvas for `text` inside a width x height box."""
    length = len(text)
    if length == 0:
        raise OverlayError('Watermark text is empty')
    box_w = max(MIN_BOX, width)
    # text gets less room vertically than horizontally
    box_h = max(MIN_BOX, height * 0.6)

    font_size = math.floor(min(box_w / 5, box_h / 1.2))
    if length > 8:
        shrink = min(1, 8 / length)
        font_size = math.floor(font_size * shrink * 1.5)
    font_size = min(font_size, min(box_w / (length * 0.6), box_h * 0.9))
    font_size = max(MIN_FONT_SIZE, font_size)

    svg_w = max(box_w, font_size * length * 0.7)
    svg_h = max(min(box_h, font_size * 1.3), font_size * 1.2)
    return TextLayout(font_size, _round_half_up(svg_w), _round_half_up(svg_h))


def build_text_svg(text: str, layout: TextLayout) -> str:
    # QtSvg ignores dominant-baseline, so the baseline is placed explicitly
    baseline = layout.height / 2 + layout.font_size * 0.35
    return (
        f'<svg width="{layout.width}" height="{layout.height}" '
        f'viewBox="0 0 {layout.width} {layout.height}" '
        f'xmlns="http://www.w3.org/2000/svg">'
        f'<text x="{layout.width / 2:g}" y="{baseline:g}" '
        f'font-family="Arial, sans-serif" font-size="{layout.font_size:g}px" '
        f'fill="white" text-anchor="middle">{escape(text)}</text>'
        f'</svg>'
    )


def _ensure_qt_app() -> QGuiApplication:
    global _app
    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
        app = _app = QGuiApplication([])
    return app


def rasterize_svg(svg: str, width: int, height: int) -> Image.Image:
    _ensure_qt_app()
    renderer = QSvgRenderer(QByteArray(svg.encode('utf-8')))
    if not renderer.isValid():
        raise OverlayError('Invalid SVG for text watermark')
    qimg = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    qimg.fill(0)
    painter = QPainter(qimg)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setRenderHint(QPainter.TextAntialiasing, True)
    renderer.render(painter)
    painter.end()
    return ImageQt.fromqimage(qimg).convert('RGBA')


def add_drop_shadow(img: Image.Image) -> Image.Image:
    """Black, half-strength, blurred copy of the alpha under the image."""
    alpha = img.getchannel('A')
    blurred = alpha.filter(ImageFilter.GaussianBlur(SHADOW_RADIUS))
    shadow = Image.new('RGBA', img.size, (0, 0, 0, 0))
    shadow.putalpha(blurred.point(lambda v: v // 2))
    return Image.alpha_composite(shadow, img)


def render_text_watermark(text: str, width: float, height: float) -> Image.Image:
    layout = text_layout(text, width, height)
    logger.info(
        'Text: "%s", Length: %d, Font size: %gpx, SVG: %dx%d',
        text, len(text), layout.font_size, layout.width, layout.height,
    )
    svg = build_text_svg(text, layout)
    try:
        img = rasterize_svg(svg, layout.width, layout.height)
    except OverlayError:
        logger.debug('SVG content: %s', svg)
        raise
    return add_drop_shadow(img)
