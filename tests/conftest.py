import logging

import pytest


@pytest.fixture
def propagate_logs(monkeypatch):
    """Let ``caplog`` see records even after the app logger stops propagation."""
    monkeypatch.setattr(logging.getLogger("square_overlay"), "propagate", True)
