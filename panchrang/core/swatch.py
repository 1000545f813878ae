"""Render a palette as a strip of square swatches.

Builds the pixels as a numpy array and hands it to PIL. Nothing is written to
disk; callers can .save() the returned image if they want a file.

Example:
    img = render_palette([red, blue, mix_colors(red, blue)])
    img.size  # (96, 32)
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from PIL import Image

from panchrang.core.types import clamp_channel, is_finite_number, is_record


def _rgb(entry: Any) -> tuple[int, int, int] | None:
    if not is_record(entry) or not all(is_finite_number(entry.get(c)) for c in ('r', 'g', 'b')):
        return None
    return tuple(clamp_channel(entry[c]) for c in ('r', 'g', 'b'))  # type: ignore[return-value]


def render_palette(palette: Sequence[Any], swatch_size: int = 32) -> Image.Image:
    """One swatch_size square per colour, left to right. Invalid entries are skipped.

    An empty palette gives a single black square.
    """
    if swatch_size < 1:
        raise ValueError(f'swatch_size must be positive, got {swatch_size}')

    colours = [rgb for rgb in (_rgb(entry) for entry in palette) if rgb is not None]
    width = swatch_size * max(len(colours), 1)
    strip = np.zeros((swatch_size, width, 3), dtype=np.uint8)
    for i, rgb in enumerate(colours):
        strip[:, i * swatch_size : (i + 1) * swatch_size] = rgb
    return Image.fromarray(strip)
