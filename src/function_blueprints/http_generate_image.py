import uuid
from time import perf_counter

import azure.functions as func
from pydantic import ValidationError as PydanticValidationError

from src.function_blueprints.dependencies import get_post_service
from src.function_blueprints.http_utils import (
    describe_validation_error,
    error_response,
    json_response,
    read_json_body,
)
from src.services.post_generation import PostGenerationService
from src.shared.logging_utils import info as log_info, error as log_error
from src.specs.common.errors import DecodeError, ValidationError
from src.specs.http.generate_image import GenerateImageRequest

bp = func.Blueprint()


def handle_generate_image(req: func.HttpRequest, *, service: PostGenerationService) -> func.HttpResponse:
    start = perf_counter()
    request_id = uuid.uuid4().hex

    data = read_json_body(req)
    if data is None:
        log_error(request_id, "generate:invalid_json")
        return error_response("Invalid JSON body", 400, code="INVALID_JSON")

    try:
        parsed = GenerateImageRequest(**data)
    except PydanticValidationError as ex:
        log_error(request_id, "generate:invalid_request", error=str(ex))
        return error_response("Invalid request", 400, code="VALIDATION_ERROR", details=describe_validation_error(ex))

    log_info(request_id, "generate:accepted", style=parsed.style.value, promptLength=len(parsed.text))
    try:
        resp = service.generate_post(parsed, request_id=request_id)
    except ValidationError as ex:
        log_error(request_id, "generate:invalid_request", error=str(ex), field=ex.field)
        return error_response(str(ex), 400, code=ex.code, details=ex.details)
    except DecodeError as ex:
        log_error(request_id, "generate:decode_failed", error=str(ex))
        return error_response("Generated image could not be decoded", 502, code=ex.code)
    except Exception as ex:
        log_error(request_id, "generate:failed", error=str(ex))
        return error_response("Internal server error", 500, code="INTERNAL_ERROR")

    log_info(request_id, "generate:responded", durationMs=int((perf_counter() - start) * 1000))
    return json_response(resp)


@bp.function_name(name="generate_image")
@bp.route(route="generate_image", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def generate_image(req: func.HttpRequest) -> func.HttpResponse:
    return handle_generate_image(req, service=get_post_service())
