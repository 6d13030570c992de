"""字段声明(FieldSpec).

约定:
- 选项是固定的具名字段集合,未声明的选项保持 `UNSET`,以区分 "未声明" 与 "声明为 None/False".
- `FieldSpec.options` 只回显显式声明的选项,校验失败时原样挂到异常上,便于客户端还原规则.
- `schema`/`element` 属于结构声明,不计入 options.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import KW_ONLY, dataclass, fields
from typing import TYPE_CHECKING, Any, Final

from request_params.core.exceptions import SchemaDefinitionError
from request_params.schemas.param_types import ParamType

if TYPE_CHECKING:
    from request_params.core.types.structures import OptionMap
    from request_params.schemas.base import Schema


class _Unset:
    """选项未声明的哨兵."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

# 属性名与对外选项名不同的字段(避开 Python 关键字).
_OPTION_ALIASES: Final[dict[str, str]] = {"in_": "in", "is_": "is"}
_STRUCTURE_FIELDS: Final[frozenset[str]] = frozenset({"name", "type", "schema", "element"})


@dataclass(frozen=True, slots=True)
class Within:
    """闭区间 [low, high],用于 `within` 选项."""

    low: Any
    high: Any

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise SchemaDefinitionError(f"invalid interval: {self.low!r}..{self.high!r}")

    @property
    def bounds(self) -> tuple[Any, Any]:
        return (self.low, self.high)

    def __contains__(self, value: object) -> bool:
        try:
            return bool(self.low <= value <= self.high)
        except TypeError:
            return False


@dataclass(frozen=True, slots=True, eq=True)
class FieldSpec:
    """单个参数的声明: 目标类型 + 可选的校验/转换选项.

    Example:
        >>> FieldSpec("sort", str, in_=["asc", "desc"], default="asc", transform="downcase")

    """

    name: str
    type: ParamType | type | str
    _: KW_ONLY
    required: bool | _Unset = UNSET
    blank: bool | _Unset = UNSET
    default: Any = UNSET
    in_: Any = UNSET
    within: Any = UNSET
    is_: Any = UNSET
    min: Any = UNSET
    max: Any = UNSET
    min_length: int | _Unset = UNSET
    max_length: int | _Unset = UNSET
    format: Any = UNSET
    transform: str | Callable[[Any], Any] | _Unset = UNSET
    custom: Callable[[Any], Any] | _Unset = UNSET
    message: str | _Unset = UNSET
    delimiter: str | _Unset = UNSET
    separator: str | _Unset = UNSET
    precision: int | _Unset = UNSET
    schema: Schema | Iterable[object] | None = None
    element: FieldSpec | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SchemaDefinitionError(f"parameter name must be a non-empty string: {self.name!r}")
        param_type = ParamType.resolve(self.type)
        object.__setattr__(self, "type", param_type)

        if self.schema is not None:
            if param_type is not ParamType.HASH:
                raise SchemaDefinitionError(f"nested schema declared on non-Hash parameter {self.name}")
            object.__setattr__(self, "schema", _as_schema(self.schema))
        if self.element is not None:
            if param_type is not ParamType.ARRAY:
                raise SchemaDefinitionError(f"element spec declared on non-Array parameter {self.name}")
            if not isinstance(self.element, FieldSpec):
                raise SchemaDefinitionError(f"element of {self.name} must be a FieldSpec")
        if self.custom is not UNSET and not callable(self.custom):
            raise SchemaDefinitionError(f"custom validator of {self.name} must be callable")
        for length_option in ("min_length", "max_length", "precision"):
            value = getattr(self, length_option)
            if value is not UNSET and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
                raise SchemaDefinitionError(f"{length_option} of {self.name} must be a non-negative integer")

    @property
    def param_type(self) -> ParamType:
        return ParamType.resolve(self.type)

    @property
    def options(self) -> OptionMap:
        """返回显式声明的选项(对外名称 -> 值)."""
        declared: OptionMap = {}
        for spec_field in fields(self):
            if spec_field.name in _STRUCTURE_FIELDS:
                continue
            value = getattr(self, spec_field.name)
            if value is UNSET:
                continue
            declared[_OPTION_ALIASES.get(spec_field.name, spec_field.name)] = value
        return declared

    def declares(self, option: str) -> bool:
        """判断某个选项(按属性名)是否显式声明."""
        return getattr(self, option, UNSET) is not UNSET

    @property
    def is_required(self) -> bool:
        return self.required is True

    def resolve_default(self) -> Any:
        """返回默认值,可调用对象在此时求值."""
        if callable(self.default):
            return self.default()
        return self.default


def _as_schema(value: Schema | Iterable[object]) -> Schema:
    from request_params.schemas.base import Schema  # 延迟导入,避免循环依赖

    if isinstance(value, Schema):
        return value
    return Schema.of(*value)


__all__ = ["UNSET", "FieldSpec", "Within"]
