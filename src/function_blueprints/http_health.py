import uuid
from typing import Optional

import azure.functions as func

from src.function_blueprints.dependencies import STARTED_AT, get_config, get_post_service
from src.function_blueprints.http_utils import error_response, json_response
from src.providers.base import ImageProvider
from src.services.health import build_health_status
from src.shared.config import AppConfig
from src.shared.logging_utils import error as log_error

bp = func.Blueprint()

_TRUTHY = {"1", "true", "yes"}


def handle_health(
    req: func.HttpRequest,
    *,
    config: AppConfig,
    started_at: float,
    provider: Optional[ImageProvider] = None,
) -> func.HttpResponse:
    request_id = uuid.uuid4().hex
    deep = (req.params.get("deep") or "").lower() in _TRUTHY
    try:
        status = build_health_status(started_at, config, provider=provider, deep=deep, request_id=request_id)
    except Exception as exc:
        log_error(request_id, "health:failed", error=str(exc))
        return error_response("Health check failed", 500, code="HEALTH_CHECK_FAILED")
    return json_response(status, 200 if status.status == "ok" else 503)


@bp.function_name(name="health")
@bp.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health(req: func.HttpRequest) -> func.HttpResponse:
    return handle_health(req, config=get_config(), started_at=STARTED_AT, provider=get_post_service().provider)
