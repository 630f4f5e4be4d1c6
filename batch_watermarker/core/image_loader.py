# -*- coding: utf-8 -*-
"""Collect source images from the input directory.

- The filter is a shell glob relative to the input directory
- `{a,b}` alternation is expanded before globbing (the stdlib glob lacks it)
- Results are absolute, de-duplicated and sorted
"""
from __future__ import annotations
import glob
import os
from typing import List

from .errors import InputDirectoryError

DEFAULT_FILTER = '*.{jpg,jpeg,png,gif,webp}'


def expand_braces(pattern: str) -> List[str]:
    """Expand the first `{...}` group, recursing for the rest.

    expand_braces('*.{jpg,png}') -> ['*.jpg', '*.png']
    Unbalanced braces are left as literal text.
    """
    start = pattern.find('{')
    if start < 0:
        return [pattern]
    depth = 0
    parts: List[str] = []
    last = start + 1
    for i in range(start, len(pattern)):
        ch = pattern[i]
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                parts.append(pattern[last:i])
                prefix, suffix = pattern[:start], pattern[i + 1:]
                results: List[str] = []
                for part in parts:
                    results.extend(expand_braces(prefix + part + suffix))
                return results
        elif ch == ',' and depth == 1:
            parts.append(pattern[last:i])
            last = i + 1
    return [pattern]


def collect_images(input_dir: str, pattern: str = DEFAULT_FILTER) -> List[str]:
    if not os.path.isdir(input_dir):
        raise InputDirectoryError(f'Input directory "{input_dir}" does not exist')
    root = os.path.abspath(input_dir)
    seen = set()
    results: List[str] = []
    for pat in expand_braces(pattern or DEFAULT_FILTER):
        for fp in glob.glob(os.path.join(glob.escape(root), pat)):
            fp = os.path.abspath(fp)
            if fp not in seen:
                seen.add(fp)
                results.append(fp)
    return sorted(results)
