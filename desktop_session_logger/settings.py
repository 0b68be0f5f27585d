"""Runtime configuration for the session logger.

Uses Pydantic BaseSettings to read environment variables with the
`SESSION_LOGS_` prefix (and a local `.env` file, if present).

Example:
    export SESSION_LOGS_APP_NAME=my-app
    export SESSION_LOGS_EXPIRY_DAYS=14
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from desktop_session_logger.core.constants import LOGS_EXPIRY_DAYS

load_dotenv()


class LoggerSettings(BaseSettings):
    """Settings read from environment variables.

    Attributes:
        app_name (str): Application name; logs live in `<base>/<app_name>-logs`.
        base_dir (Path): Overrides the platform app-data directory.
        expiry_days (int): Retention window in days.
        store_path (Path): Location of the JSON key-value store.
        process_role (str): Overrides process-role detection.
        auto_prune (bool): Prune expired sessions whenever a logger is created.
        compress_level (int): Deflate level for archive bundles.
    """

    app_name: str = "desktop-app"
    base_dir: Optional[Path] = None
    expiry_days: int = Field(default=LOGS_EXPIRY_DAYS, gt=0)
    store_path: Optional[Path] = None
    process_role: Optional[str] = None
    auto_prune: bool = True
    compress_level: int = Field(default=6, ge=0, le=9)

    class Config:
        """Pydantic config for environment variable prefix."""

        env_prefix = "SESSION_LOGS_"
