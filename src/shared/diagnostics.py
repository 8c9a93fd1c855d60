"""Logging configuration for the command line front-end."""

import logging
import sys
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
) -> list[logging.Handler]:
    """
    Configure root logging: stdout always, plus an optional UTF-8 log file.

    Existing root handlers are replaced so repeated calls do not duplicate output.

    Returns:
        The handlers installed on the root logger.

    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(path), encoding='utf-8'))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    logger.debug('Logging configured: level=%s file=%s', logging.getLevelName(level), log_file)
    return handlers
