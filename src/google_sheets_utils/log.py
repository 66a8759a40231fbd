"""
Logging setup.

The package logs through loguru and stays silent until the host opts in
with configure_logging().
"""
from typing import Optional

from loguru import logger

from google_sheets_utils.config.settings import get_settings

PACKAGE = "google_sheets_utils"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> Optional[int]:
    """
    Enable package logs and optionally add a rotating file sink.

    Args:
        level: Level for the file sink. Defaults to settings.LOG_LEVEL.
        log_file: Log file path, may contain {time}. Defaults to settings.LOG_FILE.

    Returns:
        Handler id of the file sink, or None if no file sink was added
    """
    settings = get_settings()
    logger.enable(PACKAGE)

    log_file = log_file or settings.LOG_FILE
    if not log_file:
        return None

    return logger.add(
        log_file,
        rotation="1 day",
        retention="7 days",
        level=level or settings.LOG_LEVEL,
        filter=PACKAGE
    )
