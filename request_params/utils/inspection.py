"""参数值的可读渲染.

错误文案中需要回显客户端提交的原始值,数组渲染为 `["a", "b"]`,
字典渲染为 `{"a"=>"b"}`(保持插入顺序),与常见 Web 框架的参数回显格式一致.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _quote(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


def inspect_value(value: object) -> str:
    """渲染任意参数值.

    Args:
        value: 原始或已转换的参数值.

    Returns:
        str: 字符串带双引号, None 为 `nil`, 布尔为 `true`/`false`, 容器递归渲染.

    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, (bytes, bytearray)):
        return _quote(value.decode(errors="replace"))
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, range):
        return f"{value.start}..{value.stop - 1}" if value.step == 1 else str(value)
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{inspect_value(key)}=>{inspect_value(item)}" for key, item in value.items())
        return "{" + pairs + "}"
    if isinstance(value, (Sequence, set, frozenset)):
        return "[" + ", ".join(inspect_value(item) for item in value) + "]"
    bounds = getattr(value, "bounds", None)
    if isinstance(bounds, tuple) and len(bounds) == 2:  # noqa: PLR2004
        return f"{inspect_value(bounds[0])}..{inspect_value(bounds[1])}"
    return str(value)


def describe_raw(value: object) -> str:
    """渲染类型转换失败时回显的原始值.

    标量直接输出(字符串不加引号),容器使用 `inspect_value` 渲染.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, Sequence, set, frozenset)) and not isinstance(value, (bytes, bytearray)):
        return inspect_value(value)
    if value is None or isinstance(value, bool):
        return inspect_value(value)
    return str(value)


__all__ = ["describe_raw", "inspect_value"]
