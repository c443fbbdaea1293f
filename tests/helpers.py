from __future__ import annotations

import sys
import shlex
import time
from typing import Callable, List

from appwatch.local.errors import AlreadyRunningError, StartError
from appwatch.local.supervisor.health import HealthCheckOutcome


class FakeHealthChecker:
    """Returns scripted outcomes; repeats the last one once the script runs out."""

    def __init__(self, outcomes: List[HealthCheckOutcome]) -> None:
        self.outcomes = list(outcomes)
        self.urls: List[str] = []

    def probe(self, url: str) -> HealthCheckOutcome:
        self.urls.append(url)
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


class FakeProcessHandle:
    """In-memory stand-in for ProcessHandle that records every call."""

    def __init__(self, fail_start: bool = False) -> None:
        self.fail_start = fail_start
        self.running = False
        self.starts = 0
        self.stops = 0

    def is_running(self) -> bool:
        return self.running

    def start(self, command: str) -> None:
        if self.running:
            raise AlreadyRunningError("App already running.")
        self.starts += 1
        if self.fail_start:
            raise StartError(f"Cannot launch '{command}'")
        self.running = True

    def stop(self) -> None:
        if self.running:
            self.stops += 1
        self.running = False

    def die(self) -> None:
        self.running = False


OK = HealthCheckOutcome.success(200)
DOWN = HealthCheckOutcome.transport_failure("Connection refused")
BAD = HealthCheckOutcome.bad_status(503)


def python_command(code: str) -> str:
    """A command line that runs a snippet with the current interpreter."""
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()
