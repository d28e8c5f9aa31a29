# conftest.py
from __future__ import annotations

import os
import uuid

import pytest

from avrokit.core.config import SchemaConfig, set_default_config
from avrokit.core.log import (
    bind_context,
    configure_from_env,
    enable_stdout_logging,
    get_logger,
    log_context,
)

_CONFIG_ENV = ("AVROKIT_STRICT_NAMES", "AVROKIT_STRICT_FIXED_SIZE", "AVROKIT_MAX_FIXED_SIZE")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast in-memory tests of a single component")
    config.addinivalue_line("markers", "schema: schema graph construction and inspection")
    config.addinivalue_line("markers", "config: SchemaConfig loading and defaults")
    config.addinivalue_line("markers", "logging: structured logging helpers")


def pytest_addoption(parser):
    parser.addoption(
        "--log-json",
        action="store_true",
        default=False,
        help="Emit avrokit logs in JSON format during tests",
    )


@pytest.fixture(scope="session", autouse=True)
def _configure_avrokit_logging(request):
    configure_from_env()
    prefer_json = request.config.getoption("--log-json")
    # stdout output unless the environment already decided
    if os.getenv("AVROKIT_LOG_STDOUT", "").lower() not in ("1", "true", "yes", "on"):
        enable_stdout_logging(
            level="DEBUG",
            json_output=prefer_json,
            pretty=not prefer_json,
            route_errors_to_stderr=True,
        )
    bind_context(role="pytest")


@pytest.fixture(scope="session")
def session_run_id():
    return uuid.uuid4().hex[:8]


@pytest.fixture(autouse=True)
def _test_log_context(request, session_run_id):
    log = get_logger("test")
    with log_context(pytest_nodeid=request.node.nodeid, test=request.node.name, test_run=session_run_id):
        log.debug("pytest.test.start", event="pytest.test.start")
        yield


@pytest.fixture(autouse=True)
def _isolated_default_config(monkeypatch):
    """Every test starts from the built-in defaults, whatever the CI environment exports."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def strict_config() -> SchemaConfig:
    return SchemaConfig(strict_names=True, strict_fixed_size=True, max_fixed_size=1 << 20)


@pytest.fixture
def lax_config() -> SchemaConfig:
    return SchemaConfig(strict_names=False, strict_fixed_size=False)
