import time
from typing import Optional

from src.providers.base import ImageProvider
from src.shared.config import AppConfig
from src.shared.logging_utils import warning as log_warning
from src.specs.common.datetime_utils import utc_now_iso
from src.specs.http.health import HealthCheckResult, ProviderHealth


def check_provider(provider: ImageProvider, *, deep: bool = False, request_id: Optional[str] = None) -> ProviderHealth:
    """Report provider state; only a deep check makes a network call."""
    configured = provider.is_available()
    reachable = provider.is_reachable(request_id) if deep else None
    if deep and not reachable:
        log_warning(request_id, "health:provider_unreachable", provider=provider.name, configured=configured)
    return ProviderHealth(name=provider.name, configured=configured, reachable=reachable)


def build_health_status(
    started_at: float,
    config: AppConfig,
    *,
    provider: Optional[ImageProvider] = None,
    deep: bool = False,
    request_id: Optional[str] = None,
    now: Optional[float] = None,
) -> HealthCheckResult:
    """Health payload for this service; `started_at` is a time.time() value.

    With `deep=True` the provider is probed and an unreachable provider turns
    the overall status to "error".
    """
    current = time.time() if now is None else now
    provider_health = check_provider(provider, deep=deep, request_id=request_id) if provider else None
    status = "error" if provider_health is not None and provider_health.reachable is False else "ok"
    return HealthCheckResult(
        status=status,
        timestamp=utc_now_iso(),
        service=config.service,
        uptime=max(0, int(current - started_at)),
        environment=config.environment,
        version=config.version,
        provider=provider_health,
    )
