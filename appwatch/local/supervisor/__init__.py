"""
The Supervisor package.
Manages the lifecycle of the single managed process.

This package contains the Supervisor class and its helper modules, which
together handle starting, stopping, health-checking and restarting the
managed application.
"""
from .supervisor import Supervisor
from .scheduler import run_scheduler
from .process_utils import ProcessHandle
from .health import HealthChecker, HealthCheckOutcome, OutcomeKind

__all__ = ['Supervisor', 'run_scheduler', 'ProcessHandle', 'HealthChecker', 'HealthCheckOutcome', 'OutcomeKind']
