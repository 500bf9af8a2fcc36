import logging
import logging.handlers
import multiprocessing as mp
from typing import Optional, Tuple

_LOGGER_NAME = "mandelrender"

_FORMAT = "%(asctime)s.%(msecs)03d %(processName)s %(levelname)s %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"

def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

def _reset(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

def configure_logging(*, level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Console handler always, rotating file handler when log_file is given."""
    logger = get_logger()
    _reset(logger, level)

    handlers: list = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        ))
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        logger.addHandler(h)
    return logger

def start_log_forwarding(logger: logging.Logger) -> Tuple[mp.Queue, logging.handlers.QueueListener]:
    """
    Queue that pool workers log into, plus a listener replaying those records
    on the parent's handlers. Stop the listener to flush it.
    """
    queue = mp.Queue(-1)
    listener = logging.handlers.QueueListener(queue, *logger.handlers, respect_handler_level=True)
    listener.start()
    return queue, listener

def configure_worker_logging(queue: mp.Queue, *, level: int = logging.INFO) -> None:
    logger = get_logger()
    # inherited (forked) handlers are dropped; the parent owns the real ones
    _reset(logger, level)
    qh = logging.handlers.QueueHandler(queue)
    qh.setLevel(level)
    logger.addHandler(qh)
