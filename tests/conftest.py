import os

import pytest

LOG_DIR = os.path.join("tests", "test-outputs")


def pytest_configure(config):
    """Create the directory that holds per-test log files."""
    os.makedirs(os.path.join(str(config.rootpath), LOG_DIR), exist_ok=True)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_setup(item):
    """Send each test's log records to its own file."""
    logging_plugin = item.config.pluginmanager.get_plugin("logging-plugin")
    if logging_plugin is not None:
        logging_plugin.set_log_path(os.path.join(LOG_DIR, f"{item.name}.log"))
    yield
