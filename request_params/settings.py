"""request-params - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- 校验引擎只消费 Settings,不直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- Settings 冻结后不可修改;进程内通过 `get_settings()` 复用同一份实例.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from request_params.constants.system_constants import LogLevel

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_VERSION = "0.4.0"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ARRAY_DELIMITER = ","
DEFAULT_HASH_SEPARATOR = ":"
DEFAULT_CURRENCY_SYMBOLS = "$€£¥"
DEFAULT_GROUPING_SEPARATOR = ","
DEFAULT_TRUE_VALUES = ("true", "t", "yes", "y", "1", "on")
DEFAULT_FALSE_VALUES = ("false", "f", "no", "n", "0", "off")


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


class Settings(BaseSettings):
    """参数校验引擎的运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        # 布尔字面量集合使用逗号分隔(如 "true,yes"),同时兼容 JSON 数组格式.
        # 关闭自动 JSON 解码,统一交由 field_validator 解析.
        enable_decoding=False,
    )

    app_version: str = APP_VERSION

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="PARAMS_LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="PARAMS_ENABLE_DEBUG_LOG")

    array_delimiter: str = Field(default=DEFAULT_ARRAY_DELIMITER, validation_alias="PARAMS_ARRAY_DELIMITER")
    hash_separator: str = Field(default=DEFAULT_HASH_SEPARATOR, validation_alias="PARAMS_HASH_SEPARATOR")
    currency_symbols: str = Field(default=DEFAULT_CURRENCY_SYMBOLS, validation_alias="PARAMS_CURRENCY_SYMBOLS")
    grouping_separator: str = Field(
        default=DEFAULT_GROUPING_SEPARATOR,
        validation_alias="PARAMS_GROUPING_SEPARATOR",
    )
    true_values: tuple[str, ...] = Field(default=DEFAULT_TRUE_VALUES, validation_alias="PARAMS_TRUE_VALUES")
    false_values: tuple[str, ...] = Field(default=DEFAULT_FALSE_VALUES, validation_alias="PARAMS_FALSE_VALUES")
    default_date_format: str | None = Field(default=None, validation_alias="PARAMS_DEFAULT_DATE_FORMAT")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LogLevel.__members__:
            raise ValueError(f"unsupported log level: {value}")
        return normalized

    @field_validator("default_date_format", mode="before")
    @classmethod
    def _strip_blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("true_values", "false_values", mode="before")
    @classmethod
    def _parse_csv_values(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return ()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                return tuple(item for item in (str(v).strip().lower() for v in parsed) if item)
            return tuple(item.lower() for item in _parse_csv(raw))
        if isinstance(value, (list, tuple, set)):
            items = []
            for item in value:
                text = str(item).strip().lower()
                if text:
                    items.append(text)
            return tuple(items)
        return value

    @model_validator(mode="after")
    def _validate(self) -> Settings:
        if not self.array_delimiter:
            raise ValueError("PARAMS_ARRAY_DELIMITER must not be empty")
        if not self.hash_separator:
            raise ValueError("PARAMS_HASH_SEPARATOR must not be empty")
        if self.array_delimiter == self.hash_separator:
            raise ValueError("PARAMS_ARRAY_DELIMITER and PARAMS_HASH_SEPARATOR must differ")
        if not self.true_values or not self.false_values:
            raise ValueError("PARAMS_TRUE_VALUES and PARAMS_FALSE_VALUES must not be empty")
        overlap = set(self.true_values) & set(self.false_values)
        if overlap:
            raise ValueError(f"boolean literals overlap: {', '.join(sorted(overlap))}")
        return self

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """返回进程内共享的 Settings 实例.

    Returns:
        Settings: 首次调用时从环境加载,后续复用.测试中可通过 `get_settings.cache_clear()` 重置.

    """
    settings = Settings.load()
    logger.debug("request-params settings loaded: version=%s", settings.app_version)
    return settings


__all__ = ["APP_VERSION", "Settings", "get_settings"]
