from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from appwatch.local.config import MonitorConfig


@pytest.fixture
def make_config() -> Callable[..., MonitorConfig]:
    def _make(**overrides) -> MonitorConfig:
        values = {
            "command": "app",
            "check_url": "http://127.0.0.1:8080/health",
            "interval_seconds": 5,
            "log_file": None,
            "max_failures_before_restart": 1,
        }
        values.update(overrides)
        return MonitorConfig(**values)
    return _make
