"""参数类型转换(Coercer).

说明:
- `coerce` 是纯函数: 输入原始值与目标类型,返回类型化后的值或抛出 InvalidParameterError.
- 原始值的形状(标量/序列/映射)只判定一次,各类型规则据此分派.
- 无法转换的值一律报错,绝不静默降级为 None/0;底层的 ValueError/TypeError 不会外泄.
- 此处抛出的异常尚未绑定字段,`param`/`options` 由校验器补充.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Context, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from request_params.constants.system_constants import ErrorMessages
from request_params.core.exceptions import InvalidParameterError
from request_params.core.types.structures import RawKind, classify_raw
from request_params.schemas.param_types import ParamType
from request_params.settings import get_settings
from request_params.utils.inspection import describe_raw

if TYPE_CHECKING:
    from request_params.settings import Settings

_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True, slots=True)
class _CoercionContext:
    format: str | None
    delimiter: str
    separator: str
    precision: int | None
    settings: Settings


def invalid_type(raw: object, param_type: ParamType) -> InvalidParameterError:
    """构造类型转换失败异常."""
    return InvalidParameterError(
        ErrorMessages.INVALID_TYPE.format(value=describe_raw(raw), type_name=param_type.display_name),
        message_key="INVALID_TYPE",
    )


def coerce(
    raw_value: object,
    param_type: ParamType | type | str,
    format: str | None = None,  # noqa: A002
    *,
    delimiter: str | None = None,
    separator: str | None = None,
    precision: int | None = None,
    settings: Settings | None = None,
) -> Any:
    """将原始参数值转换为目标类型.

    Args:
        raw_value: 参数树中的原始值(字符串、列表、字典或已类型化的值).
        param_type: 目标类型,支持 ParamType、Python 类型或类型名.
        format: 解析提示,日期/时间类型使用 strptime 格式.
        delimiter: Array/Hash 从字符串拆分时使用的分隔符.
        separator: Hash 从字符串拆分键值时使用的分隔符.
        precision: Decimal 保留的有效数字位数.
        settings: 可选的配置对象,缺省时使用 `get_settings()`.

    Returns:
        类型化后的值;原始值为 None 时返回 None.

    Raises:
        InvalidParameterError: 原始值无法转换为目标类型.

    """
    resolved_type = ParamType.resolve(param_type)
    kind = classify_raw(raw_value)
    if kind is RawKind.MISSING:
        return None

    resolved_settings = settings or get_settings()
    context = _CoercionContext(
        format=format,
        delimiter=delimiter or resolved_settings.array_delimiter,
        separator=separator or resolved_settings.hash_separator,
        precision=precision,
        settings=resolved_settings,
    )
    handler = _HANDLERS[resolved_type]
    try:
        return handler(raw_value, kind, context)
    except (ValueError, TypeError, ArithmeticError):
        raise invalid_type(raw_value, resolved_type) from None


def _reject_containers(raw: object, kind: RawKind, param_type: ParamType) -> None:
    if kind in (RawKind.SEQUENCE, RawKind.MAPPING):
        raise invalid_type(raw, param_type)


def _coerce_integer(raw: object, kind: RawKind, _context: _CoercionContext) -> int:
    _reject_containers(raw, kind, ParamType.INTEGER)
    if isinstance(raw, bool):
        raise invalid_type(raw, ParamType.INTEGER)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, Decimal) and raw.is_finite() and raw == raw.to_integral_value():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if _INTEGER_PATTERN.fullmatch(text):
            return int(text, 10)
    raise invalid_type(raw, ParamType.INTEGER)


def _coerce_float(raw: object, kind: RawKind, _context: _CoercionContext) -> float:
    _reject_containers(raw, kind, ParamType.FLOAT)
    if isinstance(raw, bool):
        raise invalid_type(raw, ParamType.FLOAT)
    if isinstance(raw, (int, float, Decimal)):
        result = float(raw)
    elif isinstance(raw, str) and _FLOAT_PATTERN.fullmatch(raw.strip()):
        result = float(raw.strip())
    else:
        raise invalid_type(raw, ParamType.FLOAT)
    if result != result or result in (float("inf"), float("-inf")):
        raise invalid_type(raw, ParamType.FLOAT)
    return result


def _strip_currency(text: str, settings: Settings) -> str:
    sign = ""
    if text and text[0] in "+-":
        sign, text = text[0], text[1:]
    text = text.lstrip()
    if text and text[0] in settings.currency_symbols:
        text = text[1:].lstrip()
    if settings.grouping_separator:
        text = text.replace(settings.grouping_separator, "")
    return sign + text


def _coerce_decimal(raw: object, kind: RawKind, context: _CoercionContext) -> Decimal:
    _reject_containers(raw, kind, ParamType.DECIMAL)
    if isinstance(raw, bool):
        raise invalid_type(raw, ParamType.DECIMAL)
    if isinstance(raw, Decimal):
        result = raw
    elif isinstance(raw, int):
        result = Decimal(raw)
    elif isinstance(raw, float):
        result = Decimal(repr(raw))
    elif isinstance(raw, str):
        text = _strip_currency(raw.strip(), context.settings)
        if not _FLOAT_PATTERN.fullmatch(text):
            raise invalid_type(raw, ParamType.DECIMAL)
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise invalid_type(raw, ParamType.DECIMAL) from None
    else:
        raise invalid_type(raw, ParamType.DECIMAL)
    if not result.is_finite():
        raise invalid_type(raw, ParamType.DECIMAL)
    if context.precision:
        result = Context(prec=context.precision).create_decimal(result)
    return result


def _coerce_boolean(raw: object, kind: RawKind, context: _CoercionContext) -> bool:
    _reject_containers(raw, kind, ParamType.BOOLEAN)
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in context.settings.true_values:
            return True
        if normalized in context.settings.false_values:
            return False
    raise invalid_type(raw, ParamType.BOOLEAN)


def _coerce_string(raw: object, kind: RawKind, _context: _CoercionContext) -> str:
    _reject_containers(raw, kind, ParamType.STRING)
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        return raw.decode()
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, Decimal):
        return format(raw, "f")
    return str(raw)


def _coerce_date(raw: object, kind: RawKind, context: _CoercionContext) -> date:
    _reject_containers(raw, kind, ParamType.DATE)
    if isinstance(raw, datetime) or not isinstance(raw, (date, str)):
        raise invalid_type(raw, ParamType.DATE)
    if isinstance(raw, date):
        return raw
    text = raw.strip()
    if context.format:
        return datetime.strptime(text, context.format).date()  # noqa: DTZ007
    try:
        return date.fromisoformat(text)
    except ValueError:
        if not context.settings.default_date_format:
            raise
        return datetime.strptime(text, context.settings.default_date_format).date()  # noqa: DTZ007


def _coerce_datetime(raw: object, kind: RawKind, context: _CoercionContext) -> datetime:
    _reject_containers(raw, kind, ParamType.DATETIME)
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str):
        raise invalid_type(raw, ParamType.DATETIME)
    text = raw.strip()
    if context.format:
        return datetime.strptime(text, context.format)  # noqa: DTZ007
    return datetime.fromisoformat(text)


def _coerce_time(raw: object, kind: RawKind, context: _CoercionContext) -> time:
    _reject_containers(raw, kind, ParamType.TIME)
    if isinstance(raw, time):
        return raw
    if not isinstance(raw, str):
        raise invalid_type(raw, ParamType.TIME)
    text = raw.strip()
    if context.format:
        return datetime.strptime(text, context.format).time()  # noqa: DTZ007
    return time.fromisoformat(text)


def _coerce_array(raw: object, kind: RawKind, context: _CoercionContext) -> list[Any]:
    if kind is RawKind.SEQUENCE:
        # 保持同一个 list 对象,调用方持有的子结构引用依然有效.
        return raw if isinstance(raw, list) else list(raw)  # type: ignore[arg-type]
    if kind is RawKind.SCALAR and isinstance(raw, str):
        if not raw:
            return []
        return raw.split(context.delimiter)
    raise invalid_type(raw, ParamType.ARRAY)


def _coerce_hash(raw: object, kind: RawKind, context: _CoercionContext) -> dict[str, Any]:
    if kind is RawKind.MAPPING:
        return raw if isinstance(raw, dict) else dict(raw)  # type: ignore[call-overload]
    if kind is RawKind.SCALAR and isinstance(raw, str):
        result: dict[str, Any] = {}
        if not raw:
            return result
        for pair in raw.split(context.delimiter):
            key, found, value = pair.partition(context.separator)
            if not found or not key.strip():
                raise invalid_type(raw, ParamType.HASH)
            result[key.strip()] = value
        return result
    raise invalid_type(raw, ParamType.HASH)


_HANDLERS: Mapping[ParamType, Callable[[Any, RawKind, _CoercionContext], Any]] = {
    ParamType.INTEGER: _coerce_integer,
    ParamType.FLOAT: _coerce_float,
    ParamType.DECIMAL: _coerce_decimal,
    ParamType.BOOLEAN: _coerce_boolean,
    ParamType.STRING: _coerce_string,
    ParamType.DATE: _coerce_date,
    ParamType.DATETIME: _coerce_datetime,
    ParamType.TIME: _coerce_time,
    ParamType.ARRAY: _coerce_array,
    ParamType.HASH: _coerce_hash,
}


__all__ = ["coerce", "invalid_type"]
