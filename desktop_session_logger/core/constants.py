"""Constants for the session log engine."""

from datetime import timedelta

# --- Retention --- #
LOGS_EXPIRY_DAYS: int = 7
DEFAULT_RETENTION_WINDOW: timedelta = timedelta(days=LOGS_EXPIRY_DAYS)

# --- Layout --- #
LOGS_DIR_SUFFIX: str = "-logs"
ARCHIVE_PREFIX: str = "logs-"
ARCHIVE_SUFFIX: str = ".zip"
LOG_SUFFIX: str = ".log"

MAIN_LOG_NAME: str = "main"
RENDERER_LOG_NAME: str = "renderer"
DEFAULT_LOG_NAME: str = "default"
DEFAULT_DOMAIN: str = "webview"
PREFIX_SEPARATOR: str = "-"

# --- Persisted keys --- #
LOGGING_ENABLED_KEY: str = "fileLogging"
SESSION_KEY: str = "session"

# --- Line format --- #
LINE_TIME_FORMAT: str = "{time:MM/DD/YY HH:mm:ss.SSS}"
VALUE_SEPARATOR: str = "\n\t"
LEVEL_LABELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
}

# Key placed in loguru's `extra` so session records only reach their own sink.
SINK_EXTRA_KEY: str = "session_sink"
