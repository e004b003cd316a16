import logging

from src.shared import logging_utils
from src.specs.common.errors import ApiError, AssetMissingError, ValidationError


def test_error_dict_shape():
    err = ValidationError("position", "bad corner")

    assert err.to_dict() == {
        "code": "VALIDATION_ERROR",
        "message": "bad corner",
        "details": {"field": "position"},
    }


def test_asset_missing_keeps_path():
    err = AssetMissingError("/logos/x.png")

    assert err.path == "/logos/x.png"
    assert "/logos/x.png" in str(err)


def test_api_error_includes_status():
    assert ApiError("nope", 503, code="CIRCUIT_BREAKER_OPEN").to_dict()["statusCode"] == 503


def test_log_records_carry_custom_dimensions(caplog):
    with caplog.at_level(logging.INFO, logger="socialpost"):
        logging_utils.info("req-9", "pipeline:composited", style="isometric")

    record = caplog.records[-1]
    assert record.getMessage() == "pipeline:composited"
    assert record.custom_dimensions == {"requestId": "req-9", "style": "isometric"}


def test_request_id_is_optional(caplog):
    with caplog.at_level(logging.WARNING, logger="socialpost"):
        logging_utils.warning(None, "circuit:open", breaker="gemini")

    assert caplog.records[-1].custom_dimensions == {"breaker": "gemini"}
