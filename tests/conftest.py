import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Restore the root logger after each test.

    The CLI calls ``logging.basicConfig(force=True)``, which replaces the
    root handlers (including the ones pytest installs for log capture).
    This fixture puts the original handlers and level back afterwards.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)
