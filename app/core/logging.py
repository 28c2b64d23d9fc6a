import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Installe un handler stdout sur le root logger s'il n'en a pas déjà un."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(level or settings.LOG_LEVEL)
    logging.getLogger(__name__).debug("Logging initialized (level=%s)", root_logger.level)
