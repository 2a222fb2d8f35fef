"""Logger configuration for the declaration engine.

Modules log through the shared loguru logger with a bracketed component tag
([WEEK_GENERATOR], [CALENDAR_BUILDER], [DECLARATION], ...). Nothing is
configured on import; applications call setup_logger() or
setup_logger_from_settings() once at startup.
"""

import sys
from pathlib import Path

from loguru import logger

from declaration_engine.config.settings import Settings, settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
ENGINE_PACKAGE = "declaration_engine"


def _engine_records(record) -> bool:
    return (record["name"] or "").startswith(ENGINE_PACKAGE)


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
    engine_only: bool = False,
) -> None:
    """Replace loguru's handlers with a console sink and an optional file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        serialize: Write the file sink as JSON lines
        engine_only: Drop records emitted outside the declaration_engine package
    """
    log_filter = _engine_records if engine_only else None
    logger.remove()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, filter=log_filter)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            filter=log_filter,
            backtrace=True,
            diagnose=False,
        )

    logger.info(f"Logger initialized with level={level}, file={log_file or '-'}, json={serialize}")


def setup_logger_from_settings(config: Settings | None = None) -> None:
    """Configure logging from DECLARATIONS_LOG_* settings."""
    config = config or settings
    setup_logger(level=config.log_level, log_file=config.log_file, serialize=config.log_json)
