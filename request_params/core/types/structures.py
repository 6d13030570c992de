"""通用结构化数据类型别名.

统一参数树、日志字段等类型,并提供原始参数值的形状分类.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from enum import Enum
from typing import TypeAlias

ScalarValue: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = ScalarValue | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
StructlogEventDict: TypeAlias = MutableMapping[str, JsonValue]
LoggerExtra: TypeAlias = Mapping[str, JsonValue]

# 请求参数树: 值为标量、标量序列或嵌套参数树. 校验过程会原地覆写为类型化后的值.
ParameterTree: TypeAlias = dict[str, object]
OptionMap: TypeAlias = dict[str, object]
ParamPath: TypeAlias = tuple[str, ...]

_STRING_LIKE_TYPES = (str, bytes, bytearray)


class RawKind(Enum):
    """原始参数值的形状."""

    MISSING = "missing"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def classify_raw(value: object) -> RawKind:
    """判定原始参数值属于哪一种形状.

    字符串与 bytes 视为标量;其余非字符串序列视为 SEQUENCE.

    Args:
        value: 参数树中的原始值.

    Returns:
        RawKind: 形状分类.

    """
    if value is None:
        return RawKind.MISSING
    if isinstance(value, Mapping):
        return RawKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        return RawKind.SEQUENCE
    return RawKind.SCALAR
