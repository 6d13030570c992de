"""request-params - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射应在 API/HTTP 边界完成(见 `request_params/api/error_mapping.py`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from request_params.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from request_params.core.types.structures import LoggerExtra, OptionMap, ParamPath


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础业务异常.

        Args:
            message: 直接使用的错误提示,缺省时会根据 message_key 推导.
            message_key: 覆盖默认 message_key 的可选值.
            extra: 结构化日志附加字段.
            severity: 错误严重度.
            category: 错误分类.
        """
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class InvalidParameterError(ValidationError):
    """表示某个请求参数未通过类型转换或约束校验.

    每次校验最多抛出一个该异常(fail-fast). 异常携带出错字段自身的 key(`param`),
    以及该字段声明时的完整选项集合(`options`), 便于 HTTP 边界直接生成 400 响应.

    Attributes:
        param: 出错字段自身的 key,数组元素使用下标字符串;类型转换阶段尚未绑定字段时为 None.
        options: 字段声明的选项集合(仅包含显式声明的选项).
        path: 从根节点到出错字段的 key 路径,用于日志定位.

    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="INVALID_PARAMETER",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        param: str | None = None,
        options: Mapping[str, object] | None = None,
        path: Sequence[str] = (),
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
    ) -> None:
        """初始化参数校验异常.

        Args:
            message: 对外可读的错误文案.
            param: 出错字段 key.
            options: 出错字段声明的选项.
            path: 出错字段的完整路径.
            message_key: 覆盖默认 message_key 的可选值.
            extra: 结构化日志附加字段.
        """
        super().__init__(message, message_key=message_key, extra=extra)
        self.param = param
        self.options: OptionMap = dict(options or {})
        self.path: ParamPath = tuple(path)

    def bind(
        self,
        *,
        param: str,
        options: Mapping[str, object],
        path: Sequence[str],
        message: str | None = None,
    ) -> InvalidParameterError:
        """基于当前异常生成绑定了字段信息的新异常.

        Args:
            param: 出错字段 key.
            options: 出错字段声明的选项.
            path: 出错字段的完整路径.
            message: 字段声明的 `message` 覆盖文案,为空时沿用原文案.

        Returns:
            InvalidParameterError: 新的异常实例,原实例不被修改.

        """
        return InvalidParameterError(
            message or self.message,
            param=param,
            options=options,
            path=path,
            message_key=self.message_key,
            extra=self.extra,
        )

    def __repr__(self) -> str:
        return f"InvalidParameterError(param={self.param!r}, message={self.message!r})"


class SchemaDefinitionError(ValueError):
    """字段声明本身不合法(例如未知类型、在非 Hash 字段上声明子 schema)."""


__all__ = [
    "AppError",
    "ExceptionMetadata",
    "InvalidParameterError",
    "SchemaDefinitionError",
    "ValidationError",
]
