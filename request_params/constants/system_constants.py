"""request-params - 常量定义模块.

统一管理错误分类、严重度、错误文案与 HTTP 状态码.
"""

from enum import Enum, IntEnum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class HttpStatus(IntEnum):
    """HTTP 边界使用的状态码."""

    OK = 200
    BAD_REQUEST = 400
    INTERNAL_SERVER_ERROR = 500


# 错误消息常量
class ErrorMessages:
    """错误消息常量.

    参数相关文案会直接返回给客户端, 因此保持英文且格式稳定.
    """

    # 通用错误
    INTERNAL_ERROR = "Internal server error"
    VALIDATION_ERROR = "Validation failed"
    INVALID_PARAMETER = "Invalid parameter"

    # 类型转换
    INVALID_TYPE = "'{value}' is not a valid {type_name}"

    # 字段约束
    PARAMETER_REQUIRED = "Parameter {name} is required"
    PARAMETER_BLANK = "Parameter {name} cannot be blank"
    PARAMETER_IS = "Parameter {name} must be {expected}"
    PARAMETER_WITHIN = "Parameter {name} must be within {allowed}"
    PARAMETER_MIN = "Parameter {name} cannot be less than {limit}"
    PARAMETER_MAX = "Parameter {name} cannot be greater than {limit}"
    PARAMETER_MIN_LENGTH = "Parameter {name} cannot have length less than {limit}"
    PARAMETER_MAX_LENGTH = "Parameter {name} cannot have length greater than {limit}"
    PARAMETER_FORMAT = "Parameter {name} must match format {pattern}"
    PARAMETER_INVALID = "Parameter {name} is invalid"

    # 转换函数
    UNKNOWN_TRANSFORM = "Unknown transform {name}"
    TRANSFORM_FAILED = "'{value}' cannot be transformed with {name}"

    # 参数组
    MUTUALLY_EXCLUSIVE = "Parameters {keys} are mutually exclusive"
    AT_LEAST_ONE_REQUIRED = "At least one of these parameters need to be present: {keys}"
