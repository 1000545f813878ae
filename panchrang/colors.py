"""Holi colour mixer: pure functions over colour records and palettes.

A colour is a dict {'name': str, 'r': int, 'g': int, 'b': int}, channels 0-255.
A palette is a list of colours.

Every function returns a new value and never touches its arguments. Bad input
is answered with a sentinel (None, [] or a copy) rather than an exception.
Rounding is half-up, so a channel mean of 127.5 becomes 128.

Example:
    >>> red = {'name': 'red', 'r': 255, 'g': 0, 'b': 0}
    >>> blue = {'name': 'blue', 'r': 0, 'g': 0, 'b': 255}
    >>> mix_colors(red, blue)
    {'name': 'red-blue', 'r': 128, 'g': 0, 'b': 128}
"""

import re
from collections.abc import Mapping
from typing import Any

import numpy as np

from panchrang.core.types import (
    Color,
    Palette,
    clamp_channel,
    is_finite_number,
    is_record,
    is_sequence,
    round_half_up,
)

CHANNELS = ('r', 'g', 'b')
_HEX_RE = re.compile(r'[0-9a-fA-F]{6}')


def _is_color(value: Any) -> bool:
    if not is_record(value) or not isinstance(value.get('name'), str):
        return False
    return all(is_finite_number(value.get(c)) for c in CHANNELS)


def _channels(color: Mapping) -> np.ndarray:
    return np.array([color[c] for c in CHANNELS], dtype=float)


def _to_color(name: str, values: np.ndarray) -> Color:
    r, g, b = (int(v) for v in values)
    return {'name': name, 'r': r, 'g': g, 'b': b}


def mix_colors(color1: Any, color2: Any) -> Color | None:
    """Average two colours channel by channel. Named '{name1}-{name2}'. No clamping."""
    if not _is_color(color1) or not _is_color(color2):
        return None
    with np.errstate(over='ignore'):
        mixed = round_half_up((_channels(color1) + _channels(color2)) / 2)
    if not np.isfinite(mixed).all():
        return None
    return _to_color(f'{color1["name"]}-{color2["name"]}', mixed)


def adjust_brightness(color: Any, factor: Any) -> Color | None:
    """Scale each channel by factor, round half-up, clamp to 0-255.

    Returns None for an invalid colour or a factor that is not a finite number.
    """
    if not _is_color(color) or not is_finite_number(factor):
        return None
    with np.errstate(over='ignore'):
        scaled = np.clip(round_half_up(_channels(color) * factor), 0, 255)
    return _to_color(color['name'], scaled)


def add_to_palette(palette: Any, color: Any) -> Palette:
    """Return palette + [color] as a new list.

    A palette that is not a sequence yields [color] with no check on color.
    A color that is not a record yields a plain copy of the palette.
    """
    if not is_sequence(palette):
        return [color]
    if not is_record(color):
        return list(palette)
    return [*palette, color]


def remove_from_palette(palette: Any, color_name: Any) -> Palette:
    """Drop every entry named color_name. Entries without a name are kept."""
    if not is_sequence(palette):
        return []
    return [c for c in palette if not (is_record(c) and 'name' in c and c['name'] == color_name)]


def merge_palettes(palette1: Any, palette2: Any) -> Palette:
    """Concatenate two palettes, keeping the first colour seen for each name.

    Non-sequences count as empty. Entries without a string name are dropped.
    """
    seen: set[str] = set()
    merged: Palette = []
    for palette in (palette1, palette2):
        if not is_sequence(palette):
            continue
        for color in palette:
            if not is_record(color) or not isinstance(color.get('name'), str):
                continue
            if color['name'] in seen:
                continue
            seen.add(color['name'])
            merged.append(color)
    return merged


def color_to_hex(color: Any) -> str | None:
    """'#rrggbb' for a valid colour, channels rounded and clamped. None otherwise."""
    if not _is_color(color):
        return None
    r, g, b = (clamp_channel(v) for v in _channels(color))
    return f'#{r:02x}{g:02x}{b:02x}'


def color_from_hex(name: str, hex_str: str) -> Color:
    """Build a colour from '#rgb' or '#rrggbb' (hash optional). Unparseable input gives black."""
    digits = hex_str.strip().removeprefix('#') if isinstance(hex_str, str) else ''
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    if not _HEX_RE.fullmatch(digits):
        return {'name': name, 'r': 0, 'g': 0, 'b': 0}
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return {'name': name, 'r': r, 'g': g, 'b': b}
