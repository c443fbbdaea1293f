class AppWatchError(Exception):
    """Base class for all AppWatch errors."""


class ConfigError(AppWatchError):
    """The config file is missing, unreadable or malformed."""


class LoggingSetupError(AppWatchError):
    """The configured log sink could not be opened."""


class StartError(AppWatchError):
    """The managed process could not be launched."""


class AlreadyRunningError(StartError):
    """A managed process is already tracked by the handle."""
