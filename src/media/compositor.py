"""
Compositor: blends the processed logo layer onto the base image.

The cartoon style uses multiply (white is neutral, black stays black); every
other style uses standard alpha-over.
"""
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from src.specs.common.enums import BlendMode, MONOCHROME_STYLES


def blend_mode_for_style(style: Optional[str]) -> BlendMode:
    style_id = getattr(style, "value", style)
    return BlendMode.MULTIPLY if style_id in MONOCHROME_STYLES else BlendMode.OVER


def _clip(base_size: Tuple[int, int], layer_size: Tuple[int, int], x: int, y: int):
    """Return (crop box inside layer, dest point inside base) or None if nothing overlaps."""
    bw, bh = base_size
    lw, lh = layer_size
    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + lw, bw), min(y + lh, bh)
    if right <= left or bottom <= top:
        return None
    crop = (left - x, top - y, right - x, bottom - y)
    return crop, (left, top)


def _multiply(base: Image.Image, layer: Image.Image, dest: Tuple[int, int]) -> Image.Image:
    left, top = dest
    region_box = (left, top, left + layer.width, top + layer.height)
    region = np.asarray(base.crop(region_box), dtype=np.float32)
    over = np.asarray(layer, dtype=np.float32)

    la = over[..., 3:4] / 255.0
    blended = region[..., :3] * over[..., :3] / 255.0
    rgb = region[..., :3] * (1.0 - la) + blended * la
    ba = region[..., 3:4] / 255.0
    alpha = (ba + la * (1.0 - ba)) * 255.0

    out = np.concatenate([rgb, alpha], axis=-1)
    patch = Image.fromarray(np.clip(np.rint(out), 0, 255).astype(np.uint8))
    result = base.copy()
    result.paste(patch, (left, top))
    return result


def composite_layer(
    base: Image.Image,
    layer: Image.Image,
    x: int,
    y: int,
    mode: BlendMode = BlendMode.OVER,
) -> Image.Image:
    """Blend `layer` onto `base` with its top-left corner at (x, y).

    Parts of the layer outside the base are clipped. The result keeps the
    base image's size and mode (RGB or RGBA).
    """
    base_mode = base.mode
    canvas = base.convert("RGBA") if base_mode != "RGBA" else base.copy()
    if layer.mode != "RGBA":
        layer = layer.convert("RGBA")

    clipped = _clip(canvas.size, layer.size, x, y)
    if clipped is None:
        return base.copy()
    crop, dest = clipped
    layer = layer.crop(crop)

    if mode is BlendMode.MULTIPLY:
        canvas = _multiply(canvas, layer, dest)
    else:
        canvas.alpha_composite(layer, dest=dest)

    return canvas if base_mode == "RGBA" else canvas.convert(base_mode)
