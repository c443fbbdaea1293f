import sys
import shlex
import psutil
import logging
import threading
import subprocess
from typing import Any, Dict, List, Optional

from appwatch.local.errors import AlreadyRunningError, StartError

log = logging.getLogger(__name__)


#* --- Process Creation ---
def get_process_args(command: str) -> List[str]:
    """
    Splits the configured command string into Popen arguments.

    :param command: The command line, using POSIX shell quoting rules.
    :return: The argument list.
    :raises StartError: If the command is empty or cannot be tokenized.
    """
    try:
        args = shlex.split(command, posix=sys.platform != "win32")
    except ValueError as e:
        raise StartError(f"Cannot parse command '{command}': {e}") from e
    if not args:
        raise StartError("Command is empty.")
    return args


def _get_popen_creation_flags() -> Dict[str, Any]:
    """Returns platform-specific creation flags for subprocess.Popen."""
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {}


def describe_exit(returncode: int) -> str:
    """Formats a Popen return code as a human readable exit cause."""
    if returncode < 0:
        return f"terminated by signal {-returncode}"
    return f"exit status {returncode}"


#* --- Process Handle ---
class ProcessHandle:
    """
    Owns at most one running child process.

    The owner supplies the lock guarding the handle. `start`, `stop` and
    `is_running` must be called with that lock held; the exit-watcher thread
    acquires it on its own when the child terminates.
    """

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self._proc: Optional[subprocess.Popen] = None
        self._ps_proc: Optional[psutil.Process] = None

    @property
    def lock(self) -> threading.Lock:
        """The lock guarding this handle, shared with its owner."""
        return self._lock

    @property
    def pid(self) -> Optional[int]:
        return self._proc.pid if self._proc is not None else None

    def is_running(self) -> bool:
        """True iff a process is currently tracked."""
        return self._proc is not None

    def start(self, command: str) -> None:
        """
        Launches the command and starts its exit-watcher thread.

        The child's stdout/stderr are inherited from the supervisor, so its
        output is forwarded to the operator instead of being captured.

        :param command: The command line to launch.
        :raises AlreadyRunningError: If a process is already tracked.
        :raises StartError: If the process could not be launched.
        """
        if self._proc is not None:
            raise AlreadyRunningError(f"App already running (PID: {self._proc.pid}).")

        log.info(f"Starting app: {command}")
        args = get_process_args(command)
        try:
            proc = subprocess.Popen(args, stdin=subprocess.DEVNULL, **_get_popen_creation_flags())
        except (OSError, ValueError) as e:
            raise StartError(f"Cannot launch '{command}': {e}") from e

        self._proc = proc
        # Captured now so a later kill cannot hit a recycled PID.
        self._ps_proc = psutil.Process(proc.pid)
        log.info(f"App started successfully with PID: {proc.pid}")

        threading.Thread(
            target=self._watch_exit,
            args=(proc,),
            daemon=True,
            name=f"ExitWatcher-{proc.pid}"
        ).start()

    def stop(self) -> None:
        """
        Forcefully kills the tracked process and forgets it immediately.

        Does not wait for the exit-watcher to observe the termination.
        No-op when nothing is tracked.
        """
        proc, ps_proc = self._proc, self._ps_proc
        if proc is None:
            return

        log.info(f"Stopping app (PID: {proc.pid})...")
        try:
            ps_proc.kill()
        except psutil.NoSuchProcess:
            log.debug(f"Process {proc.pid} no longer exists, skipping kill.")
        except psutil.Error as e:
            log.error(f"Failed to kill process {proc.pid}: {e}")
        self._proc = None
        self._ps_proc = None

    def _watch_exit(self, proc: subprocess.Popen) -> None:
        """Target function for the exit-watcher thread. Blocks until the child terminates."""
        returncode = proc.wait()
        with self._lock:
            if returncode != 0:
                log.warning(f"App (PID: {proc.pid}) exited with error: {describe_exit(returncode)}")
            else:
                log.info(f"App (PID: {proc.pid}) exited normally")
            # A stop() or restart() may already have replaced the tracked process.
            if self._proc is proc:
                self._proc = None
                self._ps_proc = None
