import logging

import pytest

from query_tracker_api.app.core.logging_config import SERVICE_LOGGERS, setup_logging


@pytest.fixture
def restore_levels():
    saved = {name: logging.getLogger(name).level for name in SERVICE_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_levels_applied_to_service_and_uvicorn_loggers(restore_levels) -> None:
    assert setup_logging("debug") == logging.DEBUG
    for name in ("query_tracker_api", "uvicorn", "uvicorn.error", "uvicorn.access"):
        assert logging.getLogger(name).level == logging.DEBUG

    setup_logging("WARNING")
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_levels) -> None:
    assert setup_logging("chatty") == logging.INFO
    assert logging.getLogger("query_tracker_api").level == logging.INFO


def test_handlers_installed_once(restore_levels, tmp_path, monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    logfile = tmp_path / "service.log"

    setup_logging("INFO", str(logfile))
    setup_logging("INFO", str(logfile))

    try:
        assert len(root.handlers) == 2
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    finally:
        for handler in root.handlers:
            handler.close()
