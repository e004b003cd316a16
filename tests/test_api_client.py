import requests

from helpers import FakeResponse, FakeSession
from src.shared.api_client import ApiClient
from src.shared.circuit_breaker import CircuitBreaker, CircuitState
from src.shared.config import AppConfig


def _client(settings, session, sleeper, breaker=None):
    return ApiClient(settings, breaker or CircuitBreaker(5, 60), session=session, sleep=sleeper)


def test_successful_json_call(api_settings, sleeper):
    session = FakeSession([FakeResponse(200, {"ok": True})])
    client = _client(api_settings, session, sleeper)

    resp = client.post("/things", {"a": 1}, headers={"X-Test": "1"})

    assert resp.success
    assert resp.data == {"ok": True}
    assert resp.status_code == 200
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.test/v1/things"
    assert call["json"] == {"a": 1}
    assert call["timeout"] == 3


def test_text_body_is_returned_as_text(api_settings, sleeper):
    session = FakeSession([FakeResponse(200, "pong", content_type="text/plain")])

    assert _client(api_settings, session, sleeper).get("ping").data == "pong"


def test_server_error_is_retried_then_succeeds(api_settings, sleeper):
    session = FakeSession([FakeResponse(500, {"message": "boom"}), FakeResponse(200, {"ok": True})])
    client = _client(api_settings, session, sleeper)

    resp = client.get("/things")

    assert resp.success
    assert len(session.calls) == 2
    assert sleeper.delays == [0.5]
    assert client.breaker.failure_count == 0


def test_client_error_is_not_retried_and_not_counted(api_settings, sleeper):
    body = {"error": {"code": 400, "message": "bad prompt", "status": "INVALID_ARGUMENT"}}
    session = FakeSession([FakeResponse(400, body)])
    client = _client(api_settings, session, sleeper)

    resp = client.post("/things", {})

    assert not resp.success
    assert resp.status_code == 400
    assert resp.error.code == "INVALID_ARGUMENT"
    assert str(resp.error) == "bad prompt"
    assert len(session.calls) == 1
    assert client.breaker.failure_count == 0


def test_exhausted_retries_count_one_breaker_failure(api_settings, sleeper):
    session = FakeSession([FakeResponse(503, "unavailable", content_type="text/plain")])
    client = _client(api_settings, session, sleeper)

    resp = client.get("/things")

    assert not resp.success
    assert resp.error.code == "HTTP_ERROR"
    assert len(session.calls) == api_settings.maxRetries + 1
    assert sleeper.delays == [0.5, 1.0]
    assert client.breaker.failure_count == 1


def test_timeout_maps_to_request_timeout(api_settings, sleeper):
    session = FakeSession([requests.Timeout("slow")])

    resp = _client(api_settings, session, sleeper).get("/slow", skip_retry=True)

    assert resp.error.code == "REQUEST_TIMEOUT"
    assert resp.error.details == {"timeoutSeconds": 3}
    assert len(session.calls) == 1


def test_connection_error_maps_to_network_error(api_settings, sleeper):
    session = FakeSession([requests.ConnectionError("refused")])

    resp = _client(api_settings, session, sleeper).get("/down")

    assert resp.error.code == "NETWORK_ERROR"
    assert len(session.calls) == 3


def test_open_breaker_short_circuits(api_settings, sleeper, clock):
    breaker = CircuitBreaker(1, 60, clock=clock)
    breaker.record_failure()
    session = FakeSession([FakeResponse(200, {})])

    resp = _client(api_settings, session, sleeper, breaker).get("/things")

    assert resp.status_code == 503
    assert resp.error.code == "CIRCUIT_BREAKER_OPEN"
    assert resp.error.to_dict()["statusCode"] == 503
    assert session.calls == []


def test_repeated_failures_open_the_breaker(api_settings, sleeper, clock):
    breaker = CircuitBreaker(2, 60, clock=clock)
    session = FakeSession([FakeResponse(500, {})])
    client = _client(api_settings, session, sleeper, breaker)

    client.get("/a")
    client.get("/b")

    assert breaker.state is CircuitState.OPEN
    assert client.get("/c").error.code == "CIRCUIT_BREAKER_OPEN"


def test_health_check_uses_short_timeout_without_retry(api_settings, sleeper):
    session = FakeSession([FakeResponse(500, {})])

    assert _client(api_settings, session, sleeper).health_check("/api/health") is False
    assert len(session.calls) == 1
    assert session.calls[0]["timeout"] == api_settings.healthTimeoutSeconds


def test_from_config_builds_breaker_from_settings():
    config = AppConfig.model_validate({"circuitBreaker": {"threshold": 2, "resetSeconds": 5}})

    client = ApiClient.from_config(config, name="gemini", session=FakeSession([FakeResponse()]))

    assert client.breaker.threshold == 2
    assert client.breaker.reset_timeout == 5
    assert client.breaker.name == "gemini"
    assert client.base_url == config.api.baseUrl
