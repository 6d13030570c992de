"""request-params 常量包."""

from request_params.constants.system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    HttpStatus,
    LogLevel,
)

__all__ = ["ErrorCategory", "ErrorMessages", "ErrorSeverity", "HttpStatus", "LogLevel"]
