"""
Placement calculator: where, and how large, the logo goes on the base image.
"""
import math
from typing import Union

from src.specs.common.enums import LogoPosition
from src.specs.common.errors import ValidationError
from src.specs.models.media import PlacementBox

DEFAULT_MARGIN = 20
MIN_LOGO_WIDTH = 200
MIN_SIZE_PERCENT = 10
MAX_SIZE_PERCENT = 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _parse_position(position: Union[LogoPosition, str]) -> LogoPosition:
    try:
        return LogoPosition(getattr(position, "value", position))
    except ValueError:
        allowed = ", ".join(p.value for p in LogoPosition)
        raise ValidationError("position", f"position must be one of: {allowed}") from None


def calculate_placement(
    base_width: int,
    base_height: int,
    logo_width: int,
    logo_height: int,
    position: Union[LogoPosition, str] = LogoPosition.BOTTOM_LEFT,
    size_percent: float = 35,
    *,
    margin: int = DEFAULT_MARGIN,
    min_width: int = MIN_LOGO_WIDTH,
) -> PlacementBox:
    """Compute the logo box for a corner placement.

    The logo width is `size_percent` of the base width but never below
    `min_width`; the height always follows the logo's natural aspect ratio.
    Coordinates are rounded to whole pixels and clamped to the image origin.
    """
    for name, value in (
        ("baseWidth", base_width),
        ("baseHeight", base_height),
        ("logoWidth", logo_width),
        ("logoHeight", logo_height),
    ):
        if value <= 0:
            raise ValidationError(name, f"{name} must be positive")
    if not MIN_SIZE_PERCENT <= size_percent <= MAX_SIZE_PERCENT:
        raise ValidationError(
            "logoSizePercent",
            f"logoSizePercent must be between {MIN_SIZE_PERCENT} and {MAX_SIZE_PERCENT}",
        )
    corner = _parse_position(position)

    scaled_width = max(float(min_width), base_width * (size_percent / 100))
    scaled_height = scaled_width * (logo_height / logo_width)

    if corner is LogoPosition.BOTTOM_RIGHT:
        x = base_width - scaled_width - margin
        y = base_height - scaled_height - margin
    elif corner is LogoPosition.TOP_RIGHT:
        x = base_width - scaled_width - margin
        y = float(margin)
    else:
        x = float(margin)
        y = base_height - scaled_height - margin

    return PlacementBox(
        x=max(0, _round_half_up(x)),
        y=max(0, _round_half_up(y)),
        width=max(1, _round_half_up(scaled_width)),
        height=max(1, _round_half_up(scaled_height)),
    )
