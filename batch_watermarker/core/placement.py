# -*- coding: utf-8 -*-
"""Where the overlay goes on a base image."""
from __future__ import annotations
from typing import Tuple, Union

Number = Union[int, float]

PADDING = 10

POSITIONS = ('topleft', 'topright', 'bottomleft', 'bottomright', 'center')


def normalize_position(position: str) -> str:
    """'Bottom-Right', 'bottom_right' and 'bottomright' all map to 'bottomright'."""
    return (position or '').lower().replace('-', '').replace('_', '').strip()


def anchor_pos(position: str, W: int, H: int, tw: int, th: int) -> Tuple[Number, Number]:
    """Return (left, top) for an overlay of tw x th on a W x H image.

    Unknown positions fall back to center. Center offsets are not rounded,
    the caller floors them when compositing.
    """
    pad = PADDING
    mapping = {
        'topleft': (pad, pad),
        'topright': (W - tw - pad, pad),
        'bottomleft': (pad, H - th - pad),
        'bottomright': (W - tw - pad, H - th - pad),
    }
    center = ((W - tw) / 2, (H - th) / 2)
    return mapping.get(normalize_position(position), center)
