"""Shared fixtures for the plugin configuration tests.

Every test gets its own store and host facts so no state leaks between
tests and the process environment never influences results.
"""

import logging
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from plugin_boilerplate.config import Config, HostEnvironment
from plugin_boilerplate.core.option_store import MemoryOptionStore

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

PROCESS_VARIABLES = (
    "WP_DEBUG",
    "WP_ENVIRONMENT_TYPE",
    "WP_HOME",
    "WP_SITEURL",
    "MY_PLUGIN_DEBUG",
    "MY_PLUGIN_LOG_LEVEL",
    "MY_PLUGIN_CACHE_BLOCKS",
    "MY_PLUGIN_RATE_LIMIT",
    "PLUGIN_BOILERPLATE_STORE",
    "PLUGIN_BOILERPLATE_LOG_DIR",
    "PLUGIN_BOILERPLATE_DEBUG_MODULES",
)


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def clean_environ(monkeypatch):
    """Removes every process variable the configuration layer reads."""
    for name in PROCESS_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def memory_store():
    return MemoryOptionStore()


@pytest.fixture
def neutral_host():
    """Host classified as none of development, production or staging."""
    return HostEnvironment(environment_type="local")


@pytest.fixture
def config(memory_store, neutral_host):
    return Config(store=memory_store, host=neutral_host)


@pytest.fixture
def make_config(memory_store):
    """Factory for configs sharing the test's store with custom host facts."""
    def _make(**host_kwargs):
        host_kwargs.setdefault("environment_type", "local")
        return Config(store=memory_store, host=HostEnvironment(**host_kwargs))
    return _make


@pytest.fixture
def restore_logging():
    """Undo dictConfig changes made to the package logger."""
    yield
    plugin_logger = logging.getLogger("plugin_boilerplate")
    for handler in list(plugin_logger.handlers):
        plugin_logger.removeHandler(handler)
        handler.close()
    plugin_logger.setLevel(logging.NOTSET)
    plugin_logger.propagate = True
