"""
Application configuration.

Settings are read from environment variables once and handed to the
components that need them; nothing below reads os.environ at call time.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from src.specs.common.errors import ConfigurationError

_DEFAULT_ASSET_DIR = Path(__file__).resolve().parents[2] / "assets" / "logos"


class ApiSettings(BaseModel):
    baseUrl: str = "https://generativelanguage.googleapis.com/v1beta"
    timeoutSeconds: float = Field(30.0, gt=0)
    maxRetries: int = Field(3, ge=0, le=10)
    retryDelaySeconds: float = Field(1.0, ge=0)
    healthTimeoutSeconds: float = Field(5.0, gt=0)


class CircuitBreakerSettings(BaseModel):
    threshold: int = Field(5, ge=1)
    resetSeconds: float = Field(60.0, gt=0)


class GeminiSettings(BaseModel):
    apiKey: Optional[str] = None
    model: str = "gemini-2.5-flash-image"
    aspectRatio: str = "1:1"


class LogoSettings(BaseModel):
    assetDir: Path = _DEFAULT_ASSET_DIR
    fullColorFile: str = "logo-full-color.png"
    monochromeFile: str = "logo-monochrome.png"
    marginPx: int = Field(20, ge=0)
    minWidthPx: int = Field(200, ge=1)


class AppConfig(BaseModel):
    service: str = "social-post-generator"
    environment: str = "production"
    version: str = "0.1.0"
    imageFetchTimeoutSeconds: float = Field(15.0, gt=0)
    # local imageSource paths are refused unless this is set
    localImageDir: Optional[Path] = None
    api: ApiSettings = Field(default_factory=ApiSettings)
    circuitBreaker: CircuitBreakerSettings = Field(default_factory=CircuitBreakerSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    logo: LogoSettings = Field(default_factory=LogoSettings)


# env var -> (section, field); section None means top level
_ENV_MAP = {
    "APP_ENVIRONMENT": (None, "environment"),
    "APP_VERSION": (None, "version"),
    "IMAGE_FETCH_TIMEOUT_SECONDS": (None, "imageFetchTimeoutSeconds"),
    "LOCAL_IMAGE_DIR": (None, "localImageDir"),
    "GEMINI_BASE_URL": ("api", "baseUrl"),
    "API_TIMEOUT_SECONDS": ("api", "timeoutSeconds"),
    "API_MAX_RETRIES": ("api", "maxRetries"),
    "API_RETRY_DELAY_SECONDS": ("api", "retryDelaySeconds"),
    "CIRCUIT_BREAKER_THRESHOLD": ("circuitBreaker", "threshold"),
    "CIRCUIT_BREAKER_RESET_SECONDS": ("circuitBreaker", "resetSeconds"),
    "GEMINI_API_KEY": ("gemini", "apiKey"),
    "GEMINI_MODEL": ("gemini", "model"),
    "LOGO_ASSET_DIR": ("logo", "assetDir"),
    "LOGO_FULL_COLOR_FILE": ("logo", "fullColorFile"),
    "LOGO_MONOCHROME_FILE": ("logo", "monochromeFile"),
}


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build an AppConfig from defaults overlaid with environment variables.

    Raises:
        ConfigurationError: if any variable fails validation.
    """
    env = os.environ if environ is None else environ
    raw: dict = {}
    for var, (section, field) in _ENV_MAP.items():
        value = env.get(var)
        if value is None or value == "":
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[field] = value
    try:
        return AppConfig.model_validate(raw)
    except PydanticValidationError as exc:
        bad = [".".join(str(p) for p in e["loc"]) for e in exc.errors()]
        raise ConfigurationError(f"Invalid configuration: {', '.join(bad)}", details={"fields": bad}) from exc
