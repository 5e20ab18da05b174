"""Entry point — uvicorn outcome mapped to the process exit status.

Invariants:
    - Clean uvicorn return → 0
    - uvicorn SystemExit with non-zero code (lifespan startup failure) → 1
    - Any other exception → 1, logged at CRITICAL
"""

import logging

import pytest

import pizzastore.__main__ as entrypoint


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(entrypoint, "setup_logging", lambda *a, **kw: None)


def _uvicorn_run(monkeypatch, effect):
    def run(*args, **kwargs):
        if effect is not None:
            raise effect

    monkeypatch.setattr(entrypoint.uvicorn, "run", run)


def test_clean_shutdown_exits_zero(monkeypatch):
    _uvicorn_run(monkeypatch, None)
    assert entrypoint.main() == 0


def test_startup_failure_exits_one(monkeypatch, caplog):
    _uvicorn_run(monkeypatch, SystemExit(3))
    with caplog.at_level(logging.INFO, logger="pizzastore"):
        assert entrypoint.main() == 1
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


def test_zero_system_exit_is_clean(monkeypatch):
    _uvicorn_run(monkeypatch, SystemExit(0))
    assert entrypoint.main() == 0


def test_unexpected_error_exits_one(monkeypatch, caplog):
    _uvicorn_run(monkeypatch, RuntimeError("port in use"))
    with caplog.at_level(logging.INFO, logger="pizzastore"):
        assert entrypoint.main() == 1
    critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
    assert critical and critical[0].exc_info is not None
