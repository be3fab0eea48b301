import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from config import AppConfig
from utils import ResourceMonitor, setup_logging, setup_logging_from_config
from utils import resource_monitor as resource_monitor_module
from utils.logging_setup import BASE_LOGGER, PERFORMANCE_LOGGER


@pytest.fixture
def clean_loggers():
    yield
    for name in (BASE_LOGGER, PERFORMANCE_LOGGER):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_setup_logging_writes_dated_files(tmp_path: Path, clean_loggers) -> None:
    loggers = setup_logging(tmp_path / "logs")

    loggers["main"].error("boom")
    loggers["performance"].info("fast")
    for logger in loggers.values():
        for handler in logger.handlers:
            handler.flush()

    names = sorted(path.name.split("_log_")[0] for path in (tmp_path / "logs").iterdir())
    assert names == ["error", "master", "performance"]
    assert loggers["performance"].propagate is False


def test_setup_logging_is_idempotent(clean_loggers) -> None:
    first = setup_logging()
    count = len(first["main"].handlers)
    second = setup_logging(level="DEBUG")

    assert len(second["main"].handlers) == count
    assert second["main"].level == logging.DEBUG


def test_monitor_disabled_without_limits() -> None:
    assert ResourceMonitor.from_config(AppConfig.from_dict({})) is None


def test_monitor_waits_until_usage_drops(monkeypatch: pytest.MonkeyPatch) -> None:
    samples = iter([0.0, 95.0, 95.0, 10.0])
    monkeypatch.setattr(resource_monitor_module.psutil, "cpu_percent", lambda interval=None: next(samples, 10.0))
    monkeypatch.setattr(
        resource_monitor_module.psutil, "virtual_memory", lambda: SimpleNamespace(percent=20.0)
    )
    monkeypatch.setattr(resource_monitor_module.time, "sleep", lambda seconds: None)

    monitor = ResourceMonitor.from_config(
        AppConfig.from_dict({"resource_limits": {"max_cpu_percent": 80}})
    )

    assert monitor is not None
    assert monitor.throttle() == pytest.approx(monitor.sleep_seconds * 2)


def test_setup_logging_from_config(tmp_path: Path, clean_loggers) -> None:
    config = AppConfig.from_dict({"paths": {"logs": "run_logs"}, "logging": {"level": "warning"}}, root_dir=tmp_path)

    loggers = setup_logging_from_config(config)

    assert loggers["main"].level == logging.WARNING
    assert (tmp_path / "run_logs").is_dir()
