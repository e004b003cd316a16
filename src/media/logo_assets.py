"""
Logo asset catalog: maps a visual style to one of the two logo files.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from src.media.loader import decode_image
from src.shared.config import LogoSettings
from src.specs.common.enums import LogoVariant, MONOCHROME_STYLES
from src.specs.common.errors import AssetMissingError
from src.specs.models.media import LogoAsset, RasterImage


class LogoCatalog:
    """Read-only catalog of the full-color and monochrome logo files.

    Decoded assets are cached by path; callers must not mutate the
    returned rasters.
    """

    def __init__(self, asset_dir: Path | str, full_color_file: str, monochrome_file: str) -> None:
        self.asset_dir = Path(asset_dir)
        self._paths: Dict[LogoVariant, Path] = {
            LogoVariant.FULL_COLOR: self.asset_dir / full_color_file,
            LogoVariant.MONOCHROME: self.asset_dir / monochrome_file,
        }
        self._cache: Dict[Path, RasterImage] = {}

    @classmethod
    def from_settings(cls, settings: LogoSettings) -> "LogoCatalog":
        return cls(settings.assetDir, settings.fullColorFile, settings.monochromeFile)

    def path_for(self, variant: LogoVariant) -> Path:
        return self._paths[variant]

    def variant_for_style(self, style: Optional[str]) -> LogoVariant:
        style_id = getattr(style, "value", style)
        if style_id in MONOCHROME_STYLES and self._paths[LogoVariant.MONOCHROME].is_file():
            return LogoVariant.MONOCHROME
        return LogoVariant.FULL_COLOR

    def resolve(self, style: Optional[str]) -> LogoAsset:
        """Return the logo for `style`.

        Raises:
            AssetMissingError: if the selected file is not on disk.
            DecodeError: if the file exists but is not a readable image.
        """
        variant = self.variant_for_style(style)
        path = self._paths[variant]
        if not path.is_file():
            raise AssetMissingError(str(path), details={"variant": variant.value})
        raster = self._cache.get(path)
        if raster is None:
            try:
                raw = path.read_bytes()
            except OSError as exc:
                raise AssetMissingError(str(path), details={"variant": variant.value, "reason": str(exc)}) from exc
            raster = decode_image(raw)
            if raster.image.mode != "RGBA":
                raster = RasterImage(image=raster.image.convert("RGBA"), source_format=raster.source_format)
            self._cache[path] = raster
        return LogoAsset(raster=raster, variant=variant, path=path)


__all__ = ["LogoCatalog"]
