"""参数目标类型定义."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum

from request_params.core.exceptions import SchemaDefinitionError


class ParamType(Enum):
    """参数可声明的目标类型, value 为错误文案中使用的类型名."""

    INTEGER = "Integer"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    STRING = "String"
    DATE = "Date"
    DATETIME = "DateTime"
    TIME = "Time"
    ARRAY = "Array"
    HASH = "Hash"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_temporal(self) -> bool:
        return self in (ParamType.DATE, ParamType.DATETIME, ParamType.TIME)

    @classmethod
    def resolve(cls, declared: ParamType | type | str) -> ParamType:
        """将 Python 类型、类型名或枚举统一解析为 ParamType.

        Args:
            declared: `int`、`"integer"`、`ParamType.INTEGER` 等声明形式.

        Returns:
            ParamType: 解析后的枚举值.

        Raises:
            SchemaDefinitionError: 无法识别的类型声明.

        """
        if isinstance(declared, ParamType):
            return declared
        if isinstance(declared, type):
            resolved = _PYTHON_TYPES.get(declared)
        elif isinstance(declared, str):
            resolved = _TYPE_NAMES.get(declared.strip().lower())
        else:
            resolved = None
        if resolved is None:
            raise SchemaDefinitionError(f"unsupported parameter type: {declared!r}")
        return resolved


# datetime 是 date 的子类,按类型对象精确匹配.
_PYTHON_TYPES: dict[type, ParamType] = {
    int: ParamType.INTEGER,
    float: ParamType.FLOAT,
    Decimal: ParamType.DECIMAL,
    bool: ParamType.BOOLEAN,
    str: ParamType.STRING,
    date: ParamType.DATE,
    datetime: ParamType.DATETIME,
    time: ParamType.TIME,
    list: ParamType.ARRAY,
    tuple: ParamType.ARRAY,
    dict: ParamType.HASH,
}

_TYPE_NAMES: dict[str, ParamType] = {member.value.lower(): member for member in ParamType}
_TYPE_NAMES.update(
    {
        "int": ParamType.INTEGER,
        "bigdecimal": ParamType.DECIMAL,
        "bool": ParamType.BOOLEAN,
        "str": ParamType.STRING,
        "list": ParamType.ARRAY,
        "dict": ParamType.HASH,
    },
)
