import logging
from typing import IO, Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_json_logger(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> None:
    logger = logging.getLogger()
    logger.handlers = []
    logger.setLevel(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, json_logs: bool = False) -> None:
    """JSON lines when ``json_logs`` is set, plain text otherwise."""
    if json_logs:
        setup_json_logger(level)
        return
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
