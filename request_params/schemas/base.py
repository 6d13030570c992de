"""Schema 基础设施."""

from __future__ import annotations

from dataclasses import dataclass

from request_params.core.exceptions import SchemaDefinitionError
from request_params.schemas.field_spec import FieldSpec
from request_params.schemas.groups import ConstraintGroup


@dataclass(frozen=True, slots=True)
class Schema:
    """一层参数树的声明.

    约定:
    - `groups` 先于所有字段校验.
    - `fields` 按声明顺序逐个校验, 同名字段只允许声明一次.
    """

    fields: tuple[FieldSpec, ...] = ()
    groups: tuple[ConstraintGroup, ...] = ()

    def __post_init__(self) -> None:
        field_specs = tuple(self.fields)
        groups = tuple(self.groups)
        seen: set[str] = set()
        for spec in field_specs:
            if not isinstance(spec, FieldSpec):
                raise SchemaDefinitionError(f"schema fields must be FieldSpec, got {spec!r}")
            if spec.name in seen:
                raise SchemaDefinitionError(f"duplicate parameter declaration: {spec.name}")
            seen.add(spec.name)
        for group in groups:
            if not isinstance(group, ConstraintGroup):
                raise SchemaDefinitionError(f"schema groups must be ConstraintGroup, got {group!r}")
        object.__setattr__(self, "fields", field_specs)
        object.__setattr__(self, "groups", groups)

    @classmethod
    def of(cls, *items: object) -> Schema:
        """按类型拆分字段声明与参数组.

        Example:
            >>> Schema.of(FieldSpec("page", int, default=1), ConstraintGroup.exactly_one("a", "b"))

        """
        field_specs: list[FieldSpec] = []
        groups: list[ConstraintGroup] = []
        for item in items:
            if isinstance(item, FieldSpec):
                field_specs.append(item)
            elif isinstance(item, ConstraintGroup):
                groups.append(item)
            else:
                raise SchemaDefinitionError(f"unsupported schema item: {item!r}")
        return cls(tuple(field_specs), tuple(groups))

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)
