import re
from datetime import date
from decimal import Decimal

import pytest
from werkzeug.exceptions import NotFound

from request_params.api.error_mapping import build_error_payload, map_exception_to_status, to_json_safe
from request_params.core.exceptions import AppError, InvalidParameterError
from request_params.schemas import Within


@pytest.mark.unit
def test_status_mapping() -> None:
    assert map_exception_to_status(InvalidParameterError()) == 400
    assert map_exception_to_status(AppError()) == 500
    assert map_exception_to_status(NotFound()) == 404
    assert map_exception_to_status(RuntimeError("boom")) == 500


@pytest.mark.unit
def test_to_json_safe_renders_option_values() -> None:
    def even(value: int) -> bool:
        return value % 2 == 0

    options = {
        "in": ("asc", "desc"),
        "within": Within(1, 10),
        "default": Decimal("1.50"),
        "min": date(2026, 1, 1),
        "format": re.compile(r"^\d+$"),
        "custom": even,
        "is": range(1, 4),
    }

    assert to_json_safe(options) == {
        "in": ["asc", "desc"],
        "within": [1, 10],
        "default": "1.50",
        "min": "2026-01-01",
        "format": r"^\d+$",
        "custom": "even",
        "is": [1, 3],
    }


@pytest.mark.unit
def test_build_error_payload_for_parameter_error() -> None:
    error = InvalidParameterError("Parameter sort is required", param="sort", options={"required": True})

    assert build_error_payload(error) == {
        "success": False,
        "error": True,
        "message": "Parameter sort is required",
        "message_key": "INVALID_PARAMETER",
        "param": "sort",
        "options": {"required": True},
    }


@pytest.mark.unit
def test_build_error_payload_for_generic_error() -> None:
    payload = build_error_payload(AppError())

    assert "param" not in payload
    assert payload["message"] == "Internal server error"
