from PIL import Image

from src.media.style_transform import apply_style_transform, to_monochrome
from src.specs.common.enums import StyleId


def _single(color):
    return to_monochrome(Image.new("RGBA", (1, 1), color)).getpixel((0, 0))


def test_transparent_pixels_become_opaque_white():
    assert _single((10, 200, 30, 0)) == (255, 255, 255, 255)
    assert _single((0, 0, 0, 9)) == (255, 255, 255, 255)


def test_dark_pixels_become_black():
    assert _single((20, 20, 20, 255)) == (0, 0, 0, 255)


def test_bright_saturated_pixels_become_black():
    # yellow is bright (gray 226) but very colorful
    assert _single((255, 255, 0, 255)) == (0, 0, 0, 255)


def test_bright_neutral_pixels_become_white():
    assert _single((250, 250, 250, 255)) == (255, 255, 255, 255)


def test_mid_tones_split_on_colorfulness():
    assert _single((150, 150, 150, 255)) == (255, 255, 255, 255)
    assert _single((232, 74, 39, 255)) == (0, 0, 0, 255)


def test_partial_alpha_is_preserved():
    assert _single((0, 0, 0, 128)) == (0, 0, 0, 128)


def test_output_is_pure_black_and_white():
    img = Image.new("RGBA", (64, 1))
    for x in range(64):
        img.putpixel((x, 0), (x * 4, 255 - x * 4, (x * 7) % 256, 255))
    out = to_monochrome(img)

    assert out.mode == "RGBA"
    assert {px[:3] for px in out.getdata()} <= {(0, 0, 0), (255, 255, 255)}


def test_only_cartoon_style_is_transformed():
    logo = Image.new("RGBA", (4, 4), (232, 74, 39, 255))

    assert apply_style_transform(logo, StyleId.ISOMETRIC) is logo
    assert apply_style_transform(logo, "minimalist-linkedin") is logo
    assert apply_style_transform(logo, "newyork-cartoon").getpixel((0, 0)) == (0, 0, 0, 255)
