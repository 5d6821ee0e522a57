# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Logging setup.

Handlers and formats come from etc/logging.conf; the rotating file handler's
target is ``settings.log_dir / "app.log"`` and ``settings.log_level`` (when
set) overrides the level of the application logger.

    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path

from core.config import settings

_LOGGING_CONF = Path(__file__).resolve().parent.parent.parent / "etc" / "logging.conf"

APP_LOGGER = "kuchi"


def configure_logging() -> logging.Logger:
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # %(log_file)s in logging.conf is a placeholder, not config interpolation
    text = _LOGGING_CONF.read_text(encoding="utf-8")
    text = text.replace("%(log_file)s", str(log_dir / "app.log").replace("\\", "/"))

    # Raw parser: the format strings hold %(asctime)s and friends
    parser = configparser.RawConfigParser()
    parser.read_string(text)
    logging.config.fileConfig(parser, disable_existing_loggers=False)

    app_logger = logging.getLogger(APP_LOGGER)
    if settings.log_level:
        app_logger.setLevel(settings.log_level.upper())
    return app_logger


logger = configure_logging()
