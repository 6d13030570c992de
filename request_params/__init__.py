"""request-params: Web 请求参数的类型转换与校验.

Example:
    >>> from request_params import FieldSpec, Schema, ConstraintGroup, validate
    >>> schema = Schema.of(
    ...     FieldSpec("page", int, default=1),
    ...     FieldSpec("sort", str, in_=["asc", "desc"], default="asc", transform="downcase"),
    ...     ConstraintGroup.exactly_one("exclusive_1", "exclusive_2"),
    ... )
    >>> validate({"exclusive_1": "100", "sort": "ASC"}, schema)
    {'exclusive_1': '100', 'sort': 'asc', 'page': 1}

"""

from request_params.core.exceptions import (
    AppError,
    InvalidParameterError,
    SchemaDefinitionError,
    ValidationError,
)
from request_params.schemas import (
    UNSET,
    ConstraintGroup,
    FieldSpec,
    GroupMode,
    ParamType,
    Schema,
    Within,
)
from request_params.services.param_validator import (
    ParamValidator,
    ValidationOutcome,
    any_of,
    check,
    param,
    validate,
)
from request_params.settings import APP_VERSION, Settings, get_settings
from request_params.utils.coercion import coerce

__version__ = APP_VERSION

__all__ = [
    "UNSET",
    "AppError",
    "ConstraintGroup",
    "FieldSpec",
    "GroupMode",
    "InvalidParameterError",
    "ParamType",
    "ParamValidator",
    "Schema",
    "SchemaDefinitionError",
    "Settings",
    "ValidationError",
    "ValidationOutcome",
    "Within",
    "any_of",
    "check",
    "coerce",
    "get_settings",
    "param",
    "validate",
]
