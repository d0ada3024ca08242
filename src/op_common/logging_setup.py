"""Process-wide logging configuration, applied once at app start."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())
    # httpx logs every request at INFO; RequestLogMiddleware already covers ours
    logging.getLogger("httpx").setLevel(logging.WARNING)
