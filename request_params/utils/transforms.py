"""参数值转换函数.

`transform` 选项既可以是具名转换(如 "downcase"),也可以是任意单参可调用对象.
转换作用于类型转换之后的值.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from request_params.constants.system_constants import ErrorMessages
from request_params.core.exceptions import InvalidParameterError
from request_params.utils.inspection import inspect_value

_WHITESPACE_RUN = re.compile(r"\s+")


def _squish(value: str) -> str:
    return _WHITESPACE_RUN.sub(" ", value).strip()


NAMED_TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "downcase": str.lower,
    "upcase": str.upper,
    "strip": str.strip,
    "lstrip": str.lstrip,
    "rstrip": str.rstrip,
    "capitalize": str.capitalize,
    "swapcase": str.swapcase,
    "titlecase": str.title,
    "squish": _squish,
}


def transform_name(transform: str | Callable[[Any], Any]) -> str:
    """返回转换函数的可读名称."""
    if isinstance(transform, str):
        return transform
    return getattr(transform, "__name__", None) or type(transform).__name__


def resolve_transform(transform: str | Callable[[Any], Any]) -> Callable[[Any], Any]:
    """将具名转换解析为可调用对象.

    Raises:
        InvalidParameterError: 具名转换不存在.

    """
    if callable(transform):
        return transform
    resolved = NAMED_TRANSFORMS.get(str(transform).strip().lower())
    if resolved is None:
        raise InvalidParameterError(
            ErrorMessages.UNKNOWN_TRANSFORM.format(name=transform),
            message_key="UNKNOWN_TRANSFORM",
        )
    return resolved


def apply_transform(value: Any, transform: str | Callable[[Any], Any]) -> Any:
    """对单个值执行转换.

    Args:
        value: 已完成类型转换的值.
        transform: 具名转换或可调用对象.

    Returns:
        转换后的值.

    Raises:
        InvalidParameterError: 转换不存在,或转换函数对该值抛出 ValueError/TypeError/AttributeError.

    """
    func = resolve_transform(transform)
    try:
        return func(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidParameterError(
            ErrorMessages.TRANSFORM_FAILED.format(value=inspect_value(value), name=transform_name(transform)),
            message_key="TRANSFORM_FAILED",
            extra={"cause": str(exc)},
        ) from None


__all__ = ["NAMED_TRANSFORMS", "apply_transform", "resolve_transform", "transform_name"]
