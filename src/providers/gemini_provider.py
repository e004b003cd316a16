import base64
import binascii
from typing import Any, Dict, Optional

from src.providers.base import ImageProvider
from src.shared.api_client import ApiClient
from src.shared.config import GeminiSettings
from src.shared.logging_utils import info as log_info, error as log_error
from src.specs.common.errors import ConfigurationError, ImageGenerationError


def extract_inline_image(payload: Any) -> Optional[Dict[str, str]]:
    """Return the first ``inlineData`` image part of a generateContent response."""
    if not isinstance(payload, dict):
        return None
    for candidate in payload.get("candidates") or []:
        parts = ((candidate or {}).get("content") or {}).get("parts") or []
        for part in parts:
            inline = (part or {}).get("inlineData") or (part or {}).get("inline_data")
            if not inline or not inline.get("data"):
                continue
            mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
            if mime_type.startswith("image/"):
                return {"data": inline["data"], "mimeType": mime_type}
    return None


class GeminiImageProvider(ImageProvider):
    """Generates illustrations through the Gemini ``generateContent`` REST endpoint."""

    def __init__(self, settings: GeminiSettings, client: ApiClient) -> None:
        self.settings = settings
        self._client = client

    def _headers(self) -> Dict[str, str]:
        if not self.settings.apiKey:
            raise ConfigurationError("GEMINI_API_KEY is required for image generation")
        return {"x-goog-api-key": self.settings.apiKey, "Content-Type": "application/json"}

    def is_available(self) -> bool:
        return bool(self.settings.apiKey) and self._client.breaker.allow_request()

    def is_reachable(self, request_id: Optional[str] = None) -> bool:
        """GET the model resource; proves the key is accepted and the API answers."""
        if not self.is_available():
            return False
        reachable = self._client.health_check(f"/models/{self.settings.model}", headers=self._headers())
        log_info(request_id, "gemini:probe", model=self.settings.model, reachable=reachable)
        return reachable

    def generate(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> bytes:
        headers = self._headers()
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                "imageConfig": {"aspectRatio": aspect_ratio or self.settings.aspectRatio},
            },
        }
        endpoint = f"/models/{self.settings.model}:generateContent"
        log_info(request_id, "gemini:request", model=self.settings.model, promptLength=len(prompt))
        response = self._client.post(endpoint, body, headers=headers)
        if not response.success:
            err = response.error
            log_error(request_id, "gemini:failed", code=getattr(err, "code", None), status=response.status_code)
            raise ImageGenerationError(
                f"Gemini API error: {err}",
                details={"code": getattr(err, "code", None), "statusCode": response.status_code},
            )

        image = extract_inline_image(response.data)
        if image is None:
            raise ImageGenerationError("No image data found in Gemini response")
        try:
            raw = base64.b64decode(image["data"], validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImageGenerationError("Gemini returned invalid base64 image data") from exc
        log_info(request_id, "gemini:image_received", mimeType=image["mimeType"], bytes=len(raw))
        return raw
