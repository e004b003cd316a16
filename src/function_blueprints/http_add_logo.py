import uuid
from time import perf_counter
from typing import Callable

import azure.functions as func
from pydantic import ValidationError as PydanticValidationError

from src.function_blueprints.dependencies import get_config, get_logo_catalog
from src.function_blueprints.http_utils import (
    describe_validation_error,
    error_response,
    json_response,
    read_json_body,
)
from src.media.logo_assets import LogoCatalog
from src.media.logo_pipeline import add_logo_overlay, preview_logo_overlay
from src.shared.config import AppConfig
from src.shared.logging_utils import info as log_info, error as log_error
from src.specs.common.errors import DecodeError, ValidationError
from src.specs.http.add_logo import AddLogoResponse, CompositingRequest

bp = func.Blueprint()


def handle_add_logo(
    req: func.HttpRequest,
    *,
    config: AppConfig,
    catalog: LogoCatalog,
    preview: bool = False,
) -> func.HttpResponse:
    start = perf_counter()
    request_id = uuid.uuid4().hex
    phase = "preview_logo" if preview else "add_logo"

    data = read_json_body(req)
    if data is None:
        log_error(request_id, f"{phase}:invalid_json")
        return error_response("Invalid JSON body", 400, code="INVALID_JSON")

    try:
        parsed = CompositingRequest(**data)
    except PydanticValidationError as ex:
        log_error(request_id, f"{phase}:invalid_request", error=str(ex))
        return error_response("Invalid request", 400, code="VALIDATION_ERROR", details=describe_validation_error(ex))

    log_info(
        request_id,
        f"{phase}:accepted",
        style=parsed.style.value,
        position=parsed.position.value,
        logoSize=parsed.logoSizePercent,
        logoOpacity=parsed.logoOpacityPercent,
        logoRotation=parsed.logoRotationDegrees,
    )
    run: Callable = preview_logo_overlay if preview else add_logo_overlay
    kwargs = {
        "timeout": config.imageFetchTimeoutSeconds,
        "allow_local": config.localImageDir is not None,
        "local_root": config.localImageDir,
        "request_id": request_id,
    }
    if not preview:
        kwargs.update(margin=config.logo.marginPx, min_width=config.logo.minWidthPx)
    try:
        result = run(parsed, catalog, **kwargs)
    except ValidationError as ex:
        log_error(request_id, f"{phase}:invalid_request", error=str(ex), field=ex.field)
        return error_response(str(ex), 400, code=ex.code, details=ex.details)
    except DecodeError as ex:
        log_error(request_id, f"{phase}:decode_failed", error=str(ex))
        return error_response(str(ex), 422, code=ex.code)
    except Exception as ex:
        log_error(request_id, f"{phase}:failed", error=str(ex))
        return error_response("Failed to add logo", 500, code="INTERNAL_ERROR")

    duration_ms = int((perf_counter() - start) * 1000)
    log_info(request_id, f"{phase}:completed", durationMs=duration_ms, logoApplied=result.overlay_applied)
    resp = AddLogoResponse(
        imageUrl=result.image_url,
        logoApplied=result.overlay_applied,
        placement=result.placement.as_dict() if result.placement else None,
    )
    return json_response(resp)


@bp.function_name(name="add_logo")
@bp.route(route="add_logo", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def add_logo(req: func.HttpRequest) -> func.HttpResponse:
    return handle_add_logo(req, config=get_config(), catalog=get_logo_catalog())


@bp.function_name(name="preview_logo")
@bp.route(route="preview_logo", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def preview_logo(req: func.HttpRequest) -> func.HttpResponse:
    return handle_add_logo(req, config=get_config(), catalog=get_logo_catalog(), preview=True)
