"""Shared test fixtures for dynamic-ati tests."""

import logging

import pytest

from dynamic_ati.engine import InferenceEngine
from dynamic_ati.index import ValueInteractionIndex
from dynamic_ati.tags import TagFactory


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def tags():
    """Fresh tag factory."""
    return TagFactory()


@pytest.fixture
def index():
    """Empty global index."""
    return ValueInteractionIndex()


@pytest.fixture
def engine():
    """Engine with default (strict) configuration."""
    return InferenceEngine()


@pytest.fixture
def introduced(tags, index):
    """Factory returning ``n`` tags already introduced into ``index``."""

    def make(n):
        return [index.introduce(tags.mint(i)) for i in range(n)]

    return make


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user and project config files and env vars out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(tmp_path)
    for name in ("STRICT_CHECKOUT", "VERBOSITY", "REPORT_FORMAT", "DEMO_ITERATIONS"):
        monkeypatch.delenv(f"DYNAMIC_ATI_{name}", raising=False)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and level installed by setup_logging during a test."""
    logger = logging.getLogger("dynamic_ati")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
