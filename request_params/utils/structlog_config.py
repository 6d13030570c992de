"""request-params 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog

from request_params.settings import APP_VERSION, get_settings

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

    from request_params.core.types.structures import JsonValue, StructlogEventDict
    from request_params.settings import Settings

LOGGER_NAME = "request_params"


class DebugFilter:
    """根据配置决定是否丢弃 DEBUG 日志的处理器.

    Attributes:
        enabled: 是否启用 DEBUG 日志.

    """

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def set_enabled(self, *, enabled: bool) -> None:
        """设置是否启用 DEBUG 日志."""
        self.enabled = enabled

    def __call__(
        self,
        _logger: BindableLogger,
        method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """处理日志事件,根据配置决定是否丢弃 DEBUG 日志.

        Raises:
            structlog.DropEvent: 当 DEBUG 日志未启用时抛出,丢弃该日志.

        """
        if method_name == "debug" and not self.enabled:
            raise structlog.DropEvent
        return event_dict


class StructlogConfig:
    """structlog 配置核心类.

    负责配置处理器链与调试日志过滤.配置是幂等的,多次调用只生效一次;
    调试开关可以随 Settings 重新设置.

    Attributes:
        debug_filter: 调试日志过滤器.
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def configure(self, settings: Settings | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            settings: 可选的配置对象,缺省时使用 `get_settings()`.

        """
        resolved = settings or get_settings()
        self.debug_filter.set_enabled(enabled=resolved.enable_debug_log)
        if self.configured:
            return

        logging.getLogger(LOGGER_NAME).setLevel(resolved.log_level)
        processors = [
            self.debug_filter,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._add_global_context,
            self._get_renderer(),
        ]
        structlog.configure(
            processors=cast("list[Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self.configured = True

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        event_dict.setdefault("app", "request-params")
        event_dict.setdefault("app_version", APP_VERSION)
        return event_dict

    @staticmethod
    def _get_renderer() -> Processor:
        """根据终端能力返回渲染器."""
        if sys.stderr.isatty():
            return structlog.dev.ConsoleRenderer(colors=True)
        return structlog.processors.JSONRenderer()


structlog_config = StructlogConfig()


def configure_logging(settings: Settings | None = None) -> None:
    """显式配置日志系统,通常由宿主应用启动时调用."""
    structlog_config.configure(settings)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('my_module')
        >>> logger.info('coerced', param='page')

    Note:
        本函数不会配置 structlog;未调用 `configure_logging` 时沿用宿主进程现有配置.

    """
    return structlog.get_logger(name)


def should_log_debug() -> bool:
    """检查是否应该记录调试日志.

    未经 `configure_logging` 配置时始终返回 False,调试日志不会触发任何全局配置.
    """
    return structlog_config.configured and structlog_config.debug_filter.enabled


def log_debug(message: str, module: str = "request_params", **kwargs: JsonValue) -> None:
    """记录调试级别日志.

    仅在启用调试日志时记录.

    Example:
        >>> log_debug('validating', module='validator', fields=3)

    """
    if not should_log_debug():
        return
    get_logger(LOGGER_NAME).debug(message, module=module, **kwargs)


def log_warning(
    message: str,
    module: str = "request_params",
    exception: Exception | None = None,
    **kwargs: JsonValue,
) -> None:
    """记录警告级别日志.

    Args:
        message: 日志消息.
        module: 模块名称.
        exception: 可选的异常对象.
        **kwargs: 额外的上下文信息.

    """
    logger = get_logger(LOGGER_NAME)
    if exception:
        logger.warning(message, module=module, exception=str(exception), **kwargs)
    else:
        logger.warning(message, module=module, **kwargs)


__all__ = [
    "DebugFilter",
    "StructlogConfig",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_warning",
    "should_log_debug",
    "structlog_config",
]
