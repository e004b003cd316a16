from typing import Any, Dict, Optional

import azure.functions as func
from pydantic import BaseModel, ValidationError as PydanticValidationError

from src.specs.http.add_logo import ErrorResponse


def json_response(model: BaseModel, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        body=model.model_dump_json(),
        mimetype="application/json",
        status_code=status_code,
    )


def error_response(
    message: str,
    status_code: int,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> func.HttpResponse:
    err = ErrorResponse(error=message, code=code, details=details)
    return json_response(err, status_code)


def read_json_body(req: func.HttpRequest) -> Optional[dict]:
    """Return the JSON object body, or None if it is missing or not an object."""
    try:
        data = req.get_json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def describe_validation_error(exc: PydanticValidationError) -> Dict[str, Any]:
    fields = []
    for e in exc.errors():
        fields.append({
            "field": ".".join(str(p) for p in e.get("loc", ())),
            "message": str(e.get("msg")),
        })
    return {"fields": fields}
