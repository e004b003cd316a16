from helpers import StubProvider, png_bytes
from src.services.health import build_health_status, check_provider
from src.shared.config import AppConfig
from src.specs.common.datetime_utils import parse_iso_datetime
from src.specs.common.errors import ImageGenerationError


def test_build_health_status():
    config = AppConfig(environment="test", version="9.9.9")

    status = build_health_status(100.0, config, now=160.7)

    assert status.status == "ok"
    assert status.uptime == 60
    assert status.version == "9.9.9"
    assert status.provider is None
    assert parse_iso_datetime(status.timestamp) is not None


def test_uptime_never_negative():
    assert build_health_status(200.0, AppConfig(), now=100.0).uptime == 0


def test_shallow_provider_check_makes_no_call():
    provider = StubProvider(result=png_bytes((4, 4)))

    health = check_provider(provider)

    assert health.configured is True
    assert health.reachable is None
    assert provider.request_ids == []


def test_deep_check_reports_reachable_provider():
    provider = StubProvider(result=png_bytes((4, 4)))

    status = build_health_status(0.0, AppConfig(), provider=provider, deep=True, request_id="h1")

    assert status.status == "ok"
    assert status.provider.name == "StubProvider"
    assert status.provider.reachable is True
    assert provider.request_ids == ["h1"]


def test_deep_check_unreachable_provider_is_an_error():
    provider = StubProvider(error=ImageGenerationError("down"))

    status = build_health_status(0.0, AppConfig(), provider=provider, deep=True)

    assert status.status == "error"
    assert status.provider.configured is False
    assert status.provider.reachable is False
