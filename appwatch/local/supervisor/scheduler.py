import time
import logging
import threading
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .supervisor import Supervisor

log = logging.getLogger(__name__)


def run_scheduler(
    supervisor: "Supervisor",
    interval_seconds: float,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """
    Main supervision loop. Fires `check_once` at a fixed rate.

    The first tick happens one interval after the call. A tick that overruns
    its period drops the missed ticks instead of firing them back to back.

    :param supervisor: The supervisor to drive.
    :param interval_seconds: The tick period.
    :param stop_event: Ends the loop when set. Without it the loop runs until interrupted.
    """
    stop_event = stop_event or threading.Event()
    log.info(f"Health checks every {interval_seconds}s.")

    next_tick = time.monotonic() + interval_seconds
    while not stop_event.is_set():
        try:
            if stop_event.wait(max(0.0, next_tick - time.monotonic())):
                break

            supervisor.check_once()

            next_tick += interval_seconds
            now = time.monotonic()
            if next_tick <= now:
                skipped = int((now - next_tick) // interval_seconds) + 1
                log.debug(f"Tick overran its period, dropping {skipped} tick(s).")
                next_tick += skipped * interval_seconds

        except KeyboardInterrupt:
            log.info("Supervisor loop interrupted by user.")
            break
