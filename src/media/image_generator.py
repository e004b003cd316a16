import io
from typing import Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from src.specs.common.enums import StyleId

BRAND_GRADIENT = ((0x6D, 0x08, 0xBE), (0xFF, 0xB7, 0x03), (0xDD, 0x12, 0x86))

# style -> (background, text colour); None background means brand gradient
_PALETTES: Dict[str, Tuple[Optional[Tuple[int, int, int]], Tuple[int, int, int]]] = {
    StyleId.ISOMETRIC.value: (None, (255, 255, 255)),
    StyleId.NEWYORK_CARTOON.value: ((255, 255, 255), (0, 0, 0)),
    StyleId.MINIMALIST_LINKEDIN.value: ((0xF8, 0xF9, 0xFA), (0x6D, 0x08, 0xBE)),
}


def _text_width(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> int:
    left, _, right, _ = draw.textbbox((0, 0), text, font=font)
    return right - left


def _wrap_text(text: str, draw: ImageDraw.ImageDraw, max_width: int, font: ImageFont.ImageFont) -> str:
    words = text.split()
    lines = []
    line = ""
    for w in words:
        test = (line + " " + w).strip()
        if _text_width(draw, test, font) <= max_width or not line:
            line = test
        else:
            lines.append(line)
            line = w
    if line:
        lines.append(line)
    return "\n".join(lines)


def _pick_font(size: int) -> ImageFont.ImageFont:
    # Try a few common fonts; fallback to default
    for name in [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "/Library/Fonts/Arial.ttf",
    ]:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            pass
    return ImageFont.load_default()


def _diagonal_gradient(size: Tuple[int, int]) -> Image.Image:
    """Three-stop top-left to bottom-right gradient in the brand colours."""
    w, h = size
    # Render a 256-step strip and stretch it; much cheaper than per-pixel work
    strip = Image.new("RGB", (256, 1))
    first, mid, last = BRAND_GRADIENT
    for i in range(256):
        t = i / 255
        a, b, k = (first, mid, t * 2) if t <= 0.5 else (mid, last, (t - 0.5) * 2)
        strip.putpixel((i, 0), tuple(int(a[c] + (b[c] - a[c]) * k) for c in range(3)))
    diag = int((w * w + h * h) ** 0.5) + 2
    band = strip.resize((diag, diag), Image.Resampling.BILINEAR).rotate(-45, resample=Image.Resampling.BILINEAR)
    left, top = (band.width - w) // 2, (band.height - h) // 2
    return band.crop((left, top, left + w, top + h))


def generate_placeholder_image(
    caption: str,
    style: Optional[str] = StyleId.ISOMETRIC.value,
    *,
    size: Tuple[int, int] = (1080, 1080),
) -> Tuple[bytes, Dict]:
    """Create a style-coloured placeholder image containing the caption text.

    Returns (png_bytes, metadata)
    """
    style_id = getattr(style, "value", style) or StyleId.ISOMETRIC.value
    background, text_color = _PALETTES.get(style_id, _PALETTES[StyleId.ISOMETRIC.value])
    img = _diagonal_gradient(size) if background is None else Image.new("RGB", size, color=background)
    draw = ImageDraw.Draw(img)
    w, h = size
    body_font = _pick_font(48)
    small_font = _pick_font(24)

    margin = 140
    wrapped = _wrap_text(caption.strip(), draw, w - margin * 2, body_font)
    lines = wrapped.splitlines() if wrapped else []
    line_h = 60
    y = h / 2 - len(lines) * line_h / 2
    for line in lines:
        lw = _text_width(draw, line, body_font)
        draw.text(((w - lw) / 2, y), line, fill=text_color, font=body_font)
        y += line_h

    footer = f"Style: {style_id}"
    fw = _text_width(draw, footer, small_font)
    draw.text(((w - fw) / 2, h - 100), footer, fill=text_color, font=small_font)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue(), {"provider": "placeholder", "width": w, "height": h, "style": style_id}
