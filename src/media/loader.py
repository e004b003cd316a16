"""
Image source loader: turns a data URL, remote URL or local path into a
decoded RasterImage.
"""
import base64
import binascii
import re
from io import BytesIO
from pathlib import Path
from typing import Optional

import backoff
import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from src.specs.common.errors import DecodeError
from src.specs.models.media import RasterImage

_DATA_URL_RE = re.compile(r"^data:(?P<type>[\w.+-]+/[\w.+-]+)?(?:;[\w=-]+)*;base64,", re.IGNORECASE)
_FETCH_RETRIES = 3


def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _decode_data_url(source: str) -> bytes:
    match = _DATA_URL_RE.match(source)
    if not match:
        raise DecodeError("Inline image data is missing its base64 media-type prefix")
    payload = re.sub(r"\s+", "", source[match.end():])
    if not payload:
        raise DecodeError("Inline image data is empty")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Inline image data is not valid base64") from exc


@backoff.on_exception(
    backoff.expo,
    (requests.ConnectionError, requests.Timeout),
    max_tries=_FETCH_RETRIES,
)
def _fetch(url: str, timeout: float) -> requests.Response:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response


def _download(url: str, timeout: float) -> bytes:
    try:
        return _fetch(url, timeout).content
    except requests.RequestException as exc:
        raise DecodeError(f"Could not fetch image from {url}: {exc}", details={"url": url}) from exc


def _confine(path: str, local_root: Path) -> Path:
    root = local_root.resolve()
    candidate = Path(path)
    resolved = (candidate if candidate.is_absolute() else root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise DecodeError("Local image paths must stay inside the configured image directory")
    return resolved


def _read_file(path: str, local_root: Optional[Path] = None) -> bytes:
    target = Path(path) if local_root is None else _confine(path, local_root)
    try:
        return target.read_bytes()
    except OSError as exc:
        raise DecodeError(f"Could not read image file {path}: {exc}", details={"path": path}) from exc


def load_image_bytes(
    source: str,
    *,
    timeout: float = 15.0,
    allow_local: bool = True,
    local_root: Optional[Path] = None,
) -> bytes:
    """Return the raw encoded bytes behind `source` without decoding them.

    Local paths are refused when `allow_local` is False and, when
    `local_root` is set, must resolve inside that directory.
    """
    if not isinstance(source, str) or not source.strip():
        raise DecodeError("Image source must be a non-empty string")
    source = source.strip()
    if source[:5].lower() == "data:":
        return _decode_data_url(source)
    if _is_remote(source):
        return _download(source, timeout)
    if not allow_local:
        raise DecodeError("Local image paths are not accepted")
    return _read_file(source, local_root)


def decode_image(raw: bytes) -> RasterImage:
    """Decode encoded image bytes into an RGB or RGBA raster."""
    try:
        img = Image.open(BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Unsupported or corrupt image data: {exc}") from exc

    source_format = img.format
    # animated sources: keep the first frame
    if getattr(img, "is_animated", False):
        img.seek(0)
    img = ImageOps.exif_transpose(img)
    if img.mode not in ("RGB", "RGBA"):
        has_alpha = img.mode in ("LA", "PA") or (img.mode == "P" and "transparency" in img.info)
        img = img.convert("RGBA" if has_alpha else "RGB")
    return RasterImage(image=img, source_format=source_format)


def load_image_source(source: str, *, timeout: float = 15.0) -> RasterImage:
    """Load and decode an image from a data URL, http(s) URL or local path.

    Raises:
        DecodeError: if the source cannot be read or is not a decodable image.
    """
    return decode_image(load_image_bytes(source, timeout=timeout))
