import logging
import threading
from typing import Optional

from appwatch.local.config import MonitorConfig
from appwatch.local.errors import StartError
from appwatch.local.supervisor.health import HealthChecker, HealthCheckOutcome
from appwatch.local.supervisor.process_utils import ProcessHandle

log = logging.getLogger(__name__)


class Supervisor:
    """
    Owns the managed process and the restart policy.

    The process handle and the consecutive failure counter are shared between
    the health-check tick and the exit-watcher thread; both are only touched
    while holding `self._lock`.
    """

    def __init__(
        self,
        config: MonitorConfig,
        health_checker: Optional[HealthChecker] = None,
        process: Optional[ProcessHandle] = None,
    ) -> None:
        """
        Initializes the Supervisor state.

        :param config: The immutable startup configuration.
        :param health_checker: The probe implementation; a default HealthChecker if omitted.
        :param process: The process handle. An injected handle exposing a `lock`
                        shares it with the supervisor; one is created if omitted.
        """
        self.config = config
        self.health_checker = health_checker or HealthChecker()
        self._lock = getattr(process, "lock", None) or threading.Lock()
        self.process = process if process is not None else ProcessHandle(self._lock)
        self._consecutive_failures = 0

    @property
    def consecutive_failures(self) -> int:
        with self._lock:
            return self._consecutive_failures

    def is_running(self) -> bool:
        with self._lock:
            return self.process.is_running()

    def start(self) -> None:
        """
        Launches the managed process for the first time.

        :raises StartError: If the launch fails. The caller decides whether that is fatal.
        """
        with self._lock:
            self.process.start(self.config.command)

    def restart(self) -> None:
        """
        Stops the current process (if any) and starts a new one.

        The failure counter is reset whether or not the new launch succeeded.
        A failed launch is only logged; the next tick sees the missing process
        and tries again.
        """
        log.info("Restarting app...")
        with self._lock:
            self.process.stop()
            try:
                self.process.start(self.config.command)
            except StartError as e:
                log.error(f"Failed to restart app: {e}")
            self._consecutive_failures = 0

    def _record_outcome(self, outcome: HealthCheckOutcome) -> None:
        with self._lock:
            if outcome.ok:
                self._consecutive_failures = 0
            else:
                self._consecutive_failures += 1

    def _probe(self) -> HealthCheckOutcome:
        """Runs the health probe; any error raised by the checker counts as a transport failure."""
        try:
            return self.health_checker.probe(self.config.check_url)
        except Exception as e:
            log.error(f"Health probe raised unexpectedly: {e}", exc_info=True)
            return HealthCheckOutcome.transport_failure(str(e))

    def check_once(self) -> None:
        """
        Runs one tick of the supervision policy.

        1. Probe the health URL and update the failure counter.
        2. If the process is gone, restart it regardless of the counter.
        3. Otherwise restart once the counter reaches the configured threshold.

        Never raises; unexpected errors are logged.
        """
        outcome = self._probe()
        if outcome.ok:
            log.info("Health check OK")
        else:
            log.warning(f"Health check failed: {outcome}")

        try:
            self._record_outcome(outcome)

            with self._lock:
                app_running = self.process.is_running()
                failures = self._consecutive_failures

            if not app_running:
                log.warning("Detected app process not running, restarting...")
                self.restart()
                return

            threshold = self.config.max_failures_before_restart
            if failures >= threshold:
                log.warning(f"Failures ({failures}) >= {threshold}, restarting app")
                self.restart()
        except Exception as e:
            log.error(f"Unexpected error during health check tick: {e}", exc_info=True)
