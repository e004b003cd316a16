from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from src.specs.common.enums import BlendMode, LogoVariant


@dataclass
class RasterImage:
    """Decoded 8-bit raster plus the format it was decoded from."""

    image: Image.Image
    source_format: Optional[str] = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def channels(self) -> int:
        return len(self.image.getbands())


@dataclass(frozen=True)
class LogoAsset:
    raster: RasterImage
    variant: LogoVariant
    path: Path


@dataclass(frozen=True)
class PlacementBox:
    x: int
    y: int
    width: int
    height: int

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class CompositingResult:
    image_url: str
    success: bool = True
    overlay_applied: bool = False
    placement: Optional[PlacementBox] = None
    blend_mode: Optional[BlendMode] = None
    error_code: Optional[str] = None
