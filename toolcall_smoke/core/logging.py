import logging
import sys
from pythonjsonlogger import jsonlogger

from .environment import get_log_format, get_log_level

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_format: str | None = None, level: str | None = None):
    """
    Configures root logging for a harness run.

    Plain text lines for a terminal by default; JSON records when
    LOG_FORMAT=json so CI log collectors can parse them.
    """
    log_format = (log_format or get_log_format()).lower()
    level = (level or get_log_level()).upper()

    # 1. Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 2. Prevent duplicate logs by removing existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # 3. Progress goes to stdout alongside the summary
    log_handler = logging.StreamHandler(sys.stdout)

    # 4. Pick the formatter
    if log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            fmt='%(asctime)s %(levelname)s %(name)s %(message)s',
            datefmt='%Y-%m-%dT%H:%M:%SZ'
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    log_handler.setFormatter(formatter)
    root_logger.addHandler(log_handler)

    # 5. Transport layers log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    root_logger.debug("Logging initialized (format=%s, level=%s)", log_format, level)
