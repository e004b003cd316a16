"""
Resilient HTTP client used for outbound API calls (image provider, health).

Every call goes through a circuit breaker, is retried with exponential
backoff (client errors are never retried) and carries a per-call timeout.
Failures come back as an ApiResponse rather than an exception.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import requests

from src.shared.circuit_breaker import CircuitBreaker
from src.shared.config import ApiSettings, AppConfig
from src.shared.logging_utils import error as log_error, warning as log_warning
from src.shared.retry_utils import retry_with_backoff
from src.specs.common.errors import ApiError


@dataclass
class ApiResponse:
    success: bool
    data: Any = None
    error: Optional[ApiError] = None
    status_code: Optional[int] = None


def _is_client_error(exc: BaseException) -> bool:
    status = getattr(exc, "status_code", None)
    return status is not None and 400 <= status < 500


class ApiClient:
    def __init__(
        self,
        settings: ApiSettings,
        breaker: Optional[CircuitBreaker] = None,
        *,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self.base_url = (settings.baseUrl if base_url is None else base_url).rstrip("/")
        self.breaker = breaker or CircuitBreaker()
        self._session = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "ApiClient":
        breaker = CircuitBreaker(
            config.circuitBreaker.threshold,
            config.circuitBreaker.resetSeconds,
            name=kwargs.pop("name", "api"),
        )
        return cls(config.api, breaker, **kwargs)

    def _url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @staticmethod
    def _parse_body(resp: requests.Response) -> Any:
        content_type = resp.headers.get("Content-Type", "") or ""
        if "application/json" in content_type:
            try:
                return resp.json()
            except ValueError:
                return resp.text
        return resp.text

    def _send(
        self,
        method: str,
        url: str,
        endpoint: str,
        timeout: float,
        **kwargs: Any,
    ) -> Tuple[int, Any]:
        try:
            resp = self._session.request(method, url, timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            raise ApiError(
                f"Operation '{method} {endpoint}' timed out after {timeout}s",
                code="REQUEST_TIMEOUT",
                details={"timeoutSeconds": timeout},
            ) from exc
        except requests.RequestException as exc:
            raise ApiError(str(exc) or "Network error occurred", code="NETWORK_ERROR") from exc

        data = self._parse_body(resp)
        if not resp.ok:
            message = "Request failed"
            code = "HTTP_ERROR"
            if isinstance(data, dict):
                err = data.get("error")
                if isinstance(err, dict):
                    message = err.get("message") or message
                    code = err.get("status") or err.get("code") or code
                else:
                    message = err or data.get("message") or message
                    code = data.get("code") or code
            elif data:
                message = str(data)[:500]
            raise ApiError(message, resp.status_code, code=str(code), details={"endpoint": endpoint})
        return resp.status_code, data

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        skip_retry: bool = False,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """Make an HTTP request with retry logic and circuit breaker."""
        if not self.breaker.allow_request():
            return ApiResponse(
                success=False,
                error=ApiError(
                    "Service temporarily unavailable. Circuit breaker is open.",
                    503,
                    code="CIRCUIT_BREAKER_OPEN",
                ),
                status_code=503,
            )

        url = self._url(endpoint)
        call_timeout = timeout or self.settings.timeoutSeconds
        attempts = 1 if skip_retry else self.settings.maxRetries + 1

        def _on_retry(attempt: int, exc: BaseException) -> None:
            log_warning(None, "api:retry", method=method, endpoint=endpoint, attempt=attempt, error=str(exc))

        try:
            status, data = retry_with_backoff(
                lambda: self._send(method, url, endpoint, call_timeout, json=json, headers=headers, params=params),
                attempts=attempts,
                delay=self.settings.retryDelaySeconds,
                backoff=2.0,
                exceptions=(ApiError,),
                should_retry=lambda exc: not _is_client_error(exc),
                on_retry=_on_retry,
                sleep=self._sleep,
            )
        except ApiError as exc:
            log_error(None, "api:failed", method=method, endpoint=endpoint, code=exc.code, status=exc.status_code)
            if _is_client_error(exc):
                # 4xx means the dependency is up
                self.breaker.record_success()
            else:
                self.breaker.record_failure()
            return ApiResponse(success=False, error=exc, status_code=exc.status_code)

        self.breaker.record_success()
        return ApiResponse(success=True, data=data, status_code=status)

    def get(self, endpoint: str, **kwargs: Any) -> ApiResponse:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse:
        return self.request("POST", endpoint, json=data, **kwargs)

    def health_check(self, endpoint: str, *, headers: Optional[Dict[str, str]] = None) -> bool:
        """Quick health probe: no retries and a short timeout."""
        response = self.get(endpoint, headers=headers, skip_retry=True, timeout=self.settings.healthTimeoutSeconds)
        return response.success
