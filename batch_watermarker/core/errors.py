# -*- coding: utf-8 -*-
"""Exceptions raised by the watermarking pipeline."""
from __future__ import annotations


class WatermarkError(RuntimeError):
    """Base class for watermark failures."""


class InputDirectoryError(WatermarkError):
    """The input directory is missing; the run cannot start."""


class ImageReadError(WatermarkError):
    """A source image could not be accessed or decoded."""


class OverlayError(WatermarkError):
    """The watermark overlay could not be built."""


class CompositeError(WatermarkError):
    """Compositing or encoding the result failed."""
