# tests/conftest.py
"""全局测试 fixtures.

保证每个测试使用干净的环境变量与 Settings 缓存,避免开发者本机配置影响结果。
"""

import pytest

from request_params.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """清理 PARAMS_* 环境变量并重置 Settings 缓存."""
    import os

    for key in list(os.environ):
        if key.startswith("PARAMS_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """默认配置的 Settings 实例."""
    return Settings()
