from __future__ import annotations

from typing import Optional

from src.media.image_generator import generate_placeholder_image
from src.media.logo_assets import LogoCatalog
from src.media.logo_pipeline import overlay_logo_on_bytes
from src.media.styles import build_prompt
from src.providers.base import ImageProvider
from src.shared.config import AppConfig
from src.shared.logging_utils import info as log_info, warning as log_warning
from src.specs.common.errors import ConfigurationError, ImageGenerationError
from src.specs.http.generate_image import GenerateImageRequest, GenerateImageResponse


class PostGenerationService:
    """Prompt -> provider image (or placeholder) -> logo overlay."""

    def __init__(self, config: AppConfig, provider: ImageProvider, catalog: LogoCatalog) -> None:
        self.config = config
        self.provider = provider
        self.catalog = catalog

    def _illustration(self, prompt: str, req: GenerateImageRequest, request_id: Optional[str]) -> tuple[bytes, bool]:
        try:
            raw = self.provider.generate(
                prompt, aspect_ratio=self.config.gemini.aspectRatio, request_id=request_id
            )
            return raw, False
        except (ImageGenerationError, ConfigurationError) as exc:
            log_warning(request_id, "generate:provider_unavailable", provider=self.provider.name, error=str(exc))
            raw, _ = generate_placeholder_image(req.text, req.style)
            return raw, True

    def generate_post(self, req: GenerateImageRequest, *, request_id: Optional[str] = None) -> GenerateImageResponse:
        """Generate the illustration and brand it.

        Provider failures fall back to a placeholder image; a provider image
        that cannot be decoded propagates as DecodeError.
        """
        prompt = build_prompt(req.style, req.text, req.headline)
        raw, used_placeholder = self._illustration(prompt, req, request_id)

        result = overlay_logo_on_bytes(
            raw,
            self.catalog,
            style=req.style,
            position=req.position,
            size_percent=req.logoSizePercent,
            opacity_percent=req.logoOpacityPercent,
            rotation_degrees=req.logoRotationDegrees,
            margin=self.config.logo.marginPx,
            min_width=self.config.logo.minWidthPx,
            request_id=request_id,
        )
        log_info(
            request_id,
            "generate:completed",
            style=req.style.value,
            usedPlaceholder=used_placeholder,
            logoApplied=result.overlay_applied,
        )
        message = (
            "Generated placeholder image (image provider unavailable)"
            if used_placeholder
            else "Image generated successfully"
        )
        return GenerateImageResponse(
            imageUrl=result.image_url,
            prompt=prompt,
            originalPrompt=req.text,
            style=req.style,
            message=message,
            usedPlaceholder=used_placeholder,
            logoApplied=result.overlay_applied,
        )
