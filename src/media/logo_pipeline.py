"""
Logo compositing pipeline.

Loader -> Resolver -> Placement -> Style transform -> Rotation -> Opacity
-> Compositor -> Encoder, run once per request with no shared mutable state.

Failure policy: an unreadable base image (DecodeError) or a bad request
(ValidationError) is fatal and propagates. Anything that only affects the
logo (missing or unreadable asset, transform or blend failure) is logged and
the unmodified base image is returned instead.
"""
from pathlib import Path
from typing import Optional

from PIL import Image

from src.media.compositor import blend_mode_for_style, composite_layer
from src.media.encoder import encode_bytes_data_url, encode_data_url, media_type_for_format
from src.media.layer_ops import apply_opacity, rotate_layer
from src.media.loader import decode_image, load_image_bytes
from src.media.logo_assets import LogoCatalog
from src.media.placement import DEFAULT_MARGIN, MIN_LOGO_WIDTH, calculate_placement
from src.media.style_transform import apply_style_transform
from src.shared.logging_utils import info as log_info, warning as log_warning, error as log_error
from src.specs.common.enums import BlendMode, LogoPosition, StyleId
from src.specs.common.errors import AssetMissingError, CompositingError, DecodeError
from src.specs.http.add_logo import CompositingRequest
from src.specs.models.media import CompositingResult, LogoAsset


def _degraded(raw: bytes, source_format: Optional[str], code: str) -> CompositingResult:
    return CompositingResult(
        image_url=encode_bytes_data_url(raw, media_type_for_format(source_format)),
        success=True,
        overlay_applied=False,
        error_code=code,
    )


def _resolve_logo(catalog: LogoCatalog, style: Optional[str]) -> LogoAsset:
    try:
        return catalog.resolve(style)
    except DecodeError as exc:
        # A corrupt logo file only costs us the overlay, not the request
        raise CompositingError(f"Logo asset is unreadable: {exc}") from exc


def overlay_logo_on_bytes(
    raw: bytes,
    catalog: LogoCatalog,
    *,
    style: StyleId = StyleId.ISOMETRIC,
    position: LogoPosition = LogoPosition.BOTTOM_LEFT,
    size_percent: float = 35,
    opacity_percent: float = 85,
    rotation_degrees: float = 0,
    margin: int = DEFAULT_MARGIN,
    min_width: int = MIN_LOGO_WIDTH,
    simplified: bool = False,
    request_id: Optional[str] = None,
) -> CompositingResult:
    """Composite the brand logo onto encoded image bytes.

    With `simplified=True` only placement and a plain alpha-over blend of the
    full-color logo are applied (the interactive preview path).

    Raises:
        DecodeError: if `raw` is not a decodable image.
        ValidationError: if the placement parameters are out of range.
    """
    base = decode_image(raw)
    style_id = getattr(style, "value", style)

    try:
        logo = _resolve_logo(catalog, None if simplified else style_id)
    except AssetMissingError as exc:
        log_warning(request_id, "pipeline:asset_missing", path=exc.path)
        return _degraded(raw, base.source_format, exc.code)
    except CompositingError as exc:
        log_error(request_id, "pipeline:degraded", error=str(exc), code=exc.code)
        return _degraded(raw, base.source_format, exc.code)

    placement = calculate_placement(
        base.width,
        base.height,
        logo.raster.width,
        logo.raster.height,
        position,
        size_percent,
        margin=margin,
        min_width=min_width,
    )
    mode = BlendMode.OVER if simplified else blend_mode_for_style(style_id)

    try:
        layer = logo.raster.image.resize((placement.width, placement.height), Image.Resampling.LANCZOS)
        if not simplified:
            layer = apply_style_transform(layer, style_id)
            layer = rotate_layer(layer, rotation_degrees)
            layer = apply_opacity(layer, opacity_percent)
        # rotation grows the layer; keep it centred on the placement box
        x = placement.x + (placement.width - layer.width) // 2
        y = placement.y + (placement.height - layer.height) // 2
        final = composite_layer(base.image, layer, x, y, mode)
        image_url = encode_data_url(final)
    except Exception as exc:
        err = CompositingError(f"Logo compositing failed: {exc}", details={"style": style_id})
        log_error(request_id, "pipeline:degraded", error=str(err), code=err.code)
        return _degraded(raw, base.source_format, err.code)

    log_info(
        request_id,
        "pipeline:composited",
        style=style_id,
        variant=logo.variant.value,
        blendMode=mode.value,
        **placement.as_dict(),
    )
    return CompositingResult(
        image_url=image_url,
        success=True,
        overlay_applied=True,
        placement=placement,
        blend_mode=mode,
    )


def add_logo_overlay(
    request: CompositingRequest,
    catalog: LogoCatalog,
    *,
    timeout: float = 15.0,
    allow_local: bool = True,
    local_root: Optional[Path] = None,
    margin: int = DEFAULT_MARGIN,
    min_width: int = MIN_LOGO_WIDTH,
    request_id: Optional[str] = None,
) -> CompositingResult:
    """Run the full pipeline for a validated CompositingRequest."""
    raw = load_image_bytes(request.imageSource, timeout=timeout, allow_local=allow_local, local_root=local_root)
    return overlay_logo_on_bytes(
        raw,
        catalog,
        style=request.style,
        position=request.position,
        size_percent=request.logoSizePercent,
        opacity_percent=request.logoOpacityPercent,
        rotation_degrees=request.logoRotationDegrees,
        margin=margin,
        min_width=min_width,
        request_id=request_id,
    )


def preview_logo_overlay(
    request: CompositingRequest,
    catalog: LogoCatalog,
    *,
    timeout: float = 15.0,
    allow_local: bool = True,
    local_root: Optional[Path] = None,
    request_id: Optional[str] = None,
) -> CompositingResult:
    """Simplified pipeline: placement plus plain alpha-over, no style, rotation or opacity."""
    raw = load_image_bytes(request.imageSource, timeout=timeout, allow_local=allow_local, local_root=local_root)
    return overlay_logo_on_bytes(
        raw,
        catalog,
        style=request.style,
        position=request.position,
        size_percent=request.logoSizePercent,
        simplified=True,
        request_id=request_id,
    )
