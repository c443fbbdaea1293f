"""
This module contains the static configuration settings for AppWatch.
It defines default paths, health-check parameters and process titles.
Per-run values (the managed command, the health URL, ...) live in the JSON
config file loaded by `appwatch.local.config`.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

#* --- Config File Location ---
CONFIG_PATH_ENV_VAR = "MONITOR_CONFIG"
DEFAULT_CONFIG_PATH = "/app/config.json"

#* --- Health Check Defaults ---
DEFAULT_INTERVAL_SECONDS = 5
DEFAULT_MAX_FAILURES_BEFORE_RESTART = 1
HEALTH_CHECK_TIMEOUT = 2  # seconds, per probe

#* --- Logging ---
LOG_FORMAT = '%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s'
VERBOSE_LOGGING = os.getenv("APPWATCH_VERBOSE", "false").lower() in ('true', '1', 't', 'yes', 'y')

#* --- Process Titles ---
SUPERVISOR_PROCESS_TITLE = "AppWatch - Supervisor"
DEMO_APP_PROCESS_TITLE = "AppWatch - Managed App"

#* --- Reference Managed App ---
DEMO_APP_HOST = os.getenv("APPWATCH_DEMO_HOST", "0.0.0.0")
DEMO_APP_PORT = int(os.getenv("APPWATCH_DEMO_PORT", "8080"))
