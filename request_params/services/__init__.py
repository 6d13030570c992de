"""参数校验服务."""

from request_params.services.param_validator import (
    ParamValidator,
    ValidationOutcome,
    any_of,
    check,
    param,
    validate,
)

__all__ = ["ParamValidator", "ValidationOutcome", "any_of", "check", "param", "validate"]
