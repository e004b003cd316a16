import base64
import io

from PIL import Image

_MEDIA_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


def encode_bytes_data_url(raw: bytes, media_type: str = "image/png") -> str:
    return f"data:{media_type};base64,{base64.b64encode(raw).decode()}"


def encode_image_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffered = io.BytesIO()
    image.save(buffered, format=fmt)
    return buffered.getvalue()


def encode_data_url(image: Image.Image, fmt: str = "PNG") -> str:
    """Serialize `image` and wrap it as a self-describing data URL (lossless PNG by default)."""
    fmt = fmt.upper()
    return encode_bytes_data_url(encode_image_bytes(image, fmt), _MEDIA_TYPES.get(fmt, "application/octet-stream"))


def media_type_for_format(fmt: str | None) -> str:
    return _MEDIA_TYPES.get((fmt or "PNG").upper(), "image/png")
