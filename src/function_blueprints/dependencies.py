"""
Per-process wiring for the HTTP blueprints.

Config, logo catalog and provider are built once per worker and are
read-only afterwards; request handlers receive them explicitly.
"""
import time
from functools import lru_cache

from src.media.logo_assets import LogoCatalog
from src.providers.gemini_provider import GeminiImageProvider
from src.services.post_generation import PostGenerationService
from src.shared.api_client import ApiClient
from src.shared.config import AppConfig, load_config

STARTED_AT = time.time()


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_logo_catalog() -> LogoCatalog:
    return LogoCatalog.from_settings(get_config().logo)


@lru_cache(maxsize=1)
def get_post_service() -> PostGenerationService:
    config = get_config()
    client = ApiClient.from_config(config, name="gemini")
    provider = GeminiImageProvider(config.gemini, client)
    return PostGenerationService(config, provider, get_logo_catalog())
