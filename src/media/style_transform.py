"""
Style-specific pixel transforms for the logo layer.

Only the cartoon style changes the logo: it becomes a pure black-and-white
mark so it reads like ink on the black-and-white illustration. A plain
luminance threshold drops the bright gradient part of a multi-colour logo,
so saturated pixels are pushed to black as well.
"""
from typing import Optional

import numpy as np
from PIL import Image

from src.specs.common.enums import MONOCHROME_STYLES

TRANSPARENT_ALPHA_CUTOFF = 10
DARK_GRAY_MAX = 100
LIGHT_GRAY_MIN = 200
BRIGHT_COLORFULNESS_MIN = 100
MID_COLORFULNESS_MIN = 50


def to_monochrome(logo: Image.Image) -> Image.Image:
    """Convert every pixel to black or white; near-transparent pixels become opaque white."""
    rgba = np.asarray(logo.convert("RGBA"), dtype=np.int32)
    r, g, b, a = rgba[..., 0], rgba[..., 1], rgba[..., 2], rgba[..., 3]

    gray = np.floor(0.299 * r + 0.587 * g + 0.114 * b + 0.5)
    colorfulness = np.abs(r - g) + np.abs(g - b) + np.abs(b - r)

    black = (
        (gray < DARK_GRAY_MAX)
        | ((gray > LIGHT_GRAY_MIN) & (colorfulness > BRIGHT_COLORFULNESS_MIN))
        | ((gray >= DARK_GRAY_MAX) & (gray <= LIGHT_GRAY_MIN) & (colorfulness > MID_COLORFULNESS_MIN))
    )
    transparent = a < TRANSPARENT_ALPHA_CUTOFF
    bw = np.where(black & ~transparent, 0, 255)
    alpha = np.where(transparent, 255, a)

    out = np.stack([bw, bw, bw, alpha], axis=-1).astype(np.uint8)
    return Image.fromarray(out)


def apply_style_transform(logo: Image.Image, style: Optional[str]) -> Image.Image:
    """Return the logo adjusted for `style`; unknown styles pass through unchanged."""
    style_id = getattr(style, "value", style)
    if style_id in MONOCHROME_STYLES:
        return to_monochrome(logo)
    return logo
