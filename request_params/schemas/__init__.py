"""参数声明: 类型、字段、参数组与 Schema."""

from request_params.schemas.base import Schema
from request_params.schemas.field_spec import UNSET, FieldSpec, Within
from request_params.schemas.groups import ConstraintGroup, GroupMode, any_of_group
from request_params.schemas.param_types import ParamType

__all__ = [
    "UNSET",
    "ConstraintGroup",
    "FieldSpec",
    "GroupMode",
    "ParamType",
    "Schema",
    "Within",
    "any_of_group",
]
