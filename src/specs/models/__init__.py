from __future__ import annotations

from typing import Dict, Type

from pydantic import BaseModel

from src.specs.http.add_logo import CompositingRequest, AddLogoResponse, ErrorResponse
from src.specs.http.generate_image import GenerateImageRequest, GenerateImageResponse
from src.specs.http.health import HealthCheckResult


# Registry mapping output schema filenames to models for generation
SCHEMA_MODELS: Dict[str, Type[BaseModel]] = {
    "add_logo.request.schema.json": CompositingRequest,
    "add_logo.response.schema.json": AddLogoResponse,
    "generate_image.request.schema.json": GenerateImageRequest,
    "generate_image.response.schema.json": GenerateImageResponse,
    "health.response.schema.json": HealthCheckResult,
    "error.response.schema.json": ErrorResponse,
}

__all__ = [
    "CompositingRequest",
    "AddLogoResponse",
    "ErrorResponse",
    "GenerateImageRequest",
    "GenerateImageResponse",
    "HealthCheckResult",
    "SCHEMA_MODELS",
]
