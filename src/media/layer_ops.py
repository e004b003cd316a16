from PIL import Image

_TRANSPARENT = (0, 0, 0, 0)


def rotate_layer(layer: Image.Image, degrees: float) -> Image.Image:
    """Rotate `layer` clockwise by `degrees` around its centre.

    The canvas grows to fit the rotated corners and the new area is fully
    transparent. Zero degrees returns the input object untouched.
    """
    if degrees == 0:
        return layer
    if layer.mode != "RGBA":
        layer = layer.convert("RGBA")
    # Pillow rotates counter-clockwise for positive angles
    return layer.rotate(
        -degrees,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=_TRANSPARENT,
    )


def apply_opacity(layer: Image.Image, opacity_percent: float) -> Image.Image:
    """Scale the alpha channel by `opacity_percent`/100; 100 returns the input untouched."""
    if opacity_percent == 100:
        return layer
    factor = max(0.0, min(1.0, opacity_percent / 100))
    layer = layer.convert("RGBA") if layer.mode != "RGBA" else layer.copy()
    alpha = layer.getchannel("A")
    alpha = alpha.point(lambda p: max(0, min(255, int(p * factor + 0.5))))
    layer.putalpha(alpha)
    return layer
