import sys
import logging

# Basic console logger for messages BEFORE full setup is complete.
# This logger will be replaced once the config names the real log sink.
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)-8s - [console] - %(message)s',
    stream=sys.stdout
)
log = logging.getLogger("appwatch")

import setproctitle
from appwatch import settings
from appwatch.log import setup_logging
from appwatch.local.errors import AppWatchError
from appwatch.local.config import load_config, resolve_config_path
from appwatch.local.supervisor import Supervisor, run_scheduler


def main() -> int:
    """
    The main entry point for the supervisor.

    Loads the config, sets up logging, launches the managed app and then runs
    the health-check loop until the process is killed.

    :return: The process exit code. Non-zero only for startup failures.
    """
    setproctitle.setproctitle(settings.SUPERVISOR_PROCESS_TITLE)

    config_path = resolve_config_path()
    try:
        config = load_config(config_path)
    except AppWatchError as e:
        log.critical(f"Cannot load config: {e}")
        return 1

    try:
        setup_logging(config.log_file, logging.DEBUG if settings.VERBOSE_LOGGING else logging.INFO)
    except AppWatchError as e:
        log.critical(f"Cannot setup logging: {e}")
        return 1

    log.info(f"Monitor starting with config: {config}")

    supervisor = Supervisor(config)
    try:
        supervisor.start()
    except AppWatchError as e:
        log.critical(f"Cannot start app: {e}")
        return 1

    run_scheduler(supervisor, config.interval_seconds)
    return 0


if __name__ == "__main__":
    sys.exit(main())
