import pytest
import structlog

from request_params.utils.structlog_config import DebugFilter, StructlogConfig


@pytest.mark.unit
def test_debug_filter_drops_debug_when_disabled() -> None:
    debug_filter = DebugFilter(enabled=False)

    with pytest.raises(structlog.DropEvent):
        debug_filter(None, "debug", {"event": "x"})
    assert debug_filter(None, "info", {"event": "x"}) == {"event": "x"}


@pytest.mark.unit
def test_debug_filter_passes_debug_when_enabled() -> None:
    debug_filter = DebugFilter(enabled=True)

    assert debug_filter(None, "debug", {"event": "x"}) == {"event": "x"}


@pytest.mark.unit
def test_configure_follows_settings(monkeypatch) -> None:
    from request_params.settings import Settings

    monkeypatch.setenv("PARAMS_ENABLE_DEBUG_LOG", "true")
    config = StructlogConfig()
    monkeypatch.setattr(config, "configured", True)

    config.configure(Settings())

    assert config.debug_filter.enabled is True


@pytest.mark.unit
def test_global_context_is_added() -> None:
    event = StructlogConfig._add_global_context(None, "info", {"event": "x"})

    assert event["app"] == "request-params"
    assert "app_version" in event


@pytest.mark.unit
def test_configure_logging_enables_debug_output(monkeypatch) -> None:
    from request_params.settings import Settings
    from request_params.utils import structlog_config as module

    monkeypatch.setenv("PARAMS_ENABLE_DEBUG_LOG", "1")
    config = StructlogConfig()
    monkeypatch.setattr(config, "configured", True)
    monkeypatch.setattr(module, "structlog_config", config)

    module.configure_logging(Settings())

    assert module.should_log_debug() is True


@pytest.mark.unit
def test_log_debug_without_configuration_is_silent(monkeypatch) -> None:
    import logging

    from request_params.utils import structlog_config as module

    monkeypatch.setenv("PARAMS_ENABLE_DEBUG_LOG", "true")
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    config = StructlogConfig()
    monkeypatch.setattr(module, "structlog_config", config)

    module.log_debug("validating", module="test")

    assert module.should_log_debug() is False
    assert config.configured is False
    assert root.handlers == []
