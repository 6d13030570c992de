"""request-params - 异常与 HTTP 状态码映射(API 边界).

说明:
- 异常定义属于 shared kernel(`request_params/core/exceptions.py`),不感知 HTTP.
- 本模块负责将异常映射为对外 HTTP 状态码与 JSON 响应体,仅应在 HTTP 边界调用.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum

from werkzeug.exceptions import HTTPException

from request_params.constants import HttpStatus
from request_params.core.exceptions import AppError, InvalidParameterError, ValidationError
from request_params.schemas.field_spec import Within
from request_params.utils.transforms import transform_name

_EXCEPTION_STATUS_MAP: tuple[tuple[type[Exception], int], ...] = ((ValidationError, HttpStatus.BAD_REQUEST),)


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码."""

    for exc_type, status in _EXCEPTION_STATUS_MAP:
        if isinstance(error, exc_type):
            return status

    if isinstance(error, AppError):
        return default

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    return default


def to_json_safe(value: object) -> object:
    """将选项值转换为可 JSON 序列化的结构.

    可调用对象输出其名称, `Within` 输出 `[low, high]`, Decimal/日期输出字符串.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Within):
        return [to_json_safe(value.low), to_json_safe(value.high)]
    if isinstance(value, range):
        return [value.start, value.stop - 1]
    if isinstance(value, Mapping):
        return {str(key): to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (Sequence, set, frozenset)) and not isinstance(value, (bytes, bytearray)):
        return [to_json_safe(item) for item in value]
    pattern = getattr(value, "pattern", None)
    if isinstance(pattern, str):
        return pattern
    if callable(value):
        return transform_name(value)  # type: ignore[arg-type]
    return str(value)


def build_error_payload(error: AppError) -> dict[str, object]:
    """生成统一的错误响应体.

    Returns:
        dict: 包含 success/error/message/message_key,参数错误额外包含 param 与 options.

    """
    payload: dict[str, object] = {
        "success": False,
        "error": True,
        "message": error.message,
        "message_key": error.message_key,
    }
    if isinstance(error, InvalidParameterError):
        payload["param"] = error.param
        payload["options"] = to_json_safe(error.options)
    return payload


__all__ = ["build_error_payload", "map_exception_to_status", "to_json_safe"]
