from __future__ import annotations

from abc import ABC, abstractmethod


class ImageProvider(ABC):
    """Abstract base class for generative-image providers.

    Providers are shared across concurrent requests and hold no per-request
    state; the ``request_id`` used for logging is passed into each call.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        aspect_ratio: str | None = None,
        request_id: str | None = None,
    ) -> bytes:
        """Return encoded image bytes for ``prompt``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the provider is configured and its breaker is not open."""

    def is_reachable(self, request_id: str | None = None) -> bool:
        """Probe the upstream service; defaults to ``is_available``."""
        return self.is_available()


__all__ = ["ImageProvider"]
