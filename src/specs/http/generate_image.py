from pydantic import BaseModel, Field, model_validator
from typing import Optional

from src.specs.common.enums import StyleId, LogoPosition


class GenerateImageRequest(BaseModel):
    """Form payload for generating a branded post illustration.

    `prompt` and `message` are interchangeable; one of them is required.
    """

    prompt: Optional[str] = None
    message: Optional[str] = None
    headline: Optional[str] = Field(None, max_length=200)
    style: StyleId = StyleId.ISOMETRIC
    position: LogoPosition = LogoPosition.BOTTOM_LEFT
    logoSizePercent: float = Field(35, ge=10, le=100)
    logoOpacityPercent: float = Field(85, ge=0, le=100)
    logoRotationDegrees: float = Field(0, ge=-180, le=180)

    @model_validator(mode="after")
    def _require_text(self) -> "GenerateImageRequest":
        text = (self.prompt or self.message or "").strip()
        if not text:
            raise ValueError("prompt must be a non-empty string")
        return self

    @property
    def text(self) -> str:
        return (self.prompt or self.message or "").strip()


class GenerateImageResponse(BaseModel):
    imageUrl: str
    prompt: str
    originalPrompt: str
    style: StyleId
    message: str
    usedPlaceholder: bool = False
    logoApplied: bool = True
