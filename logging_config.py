import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_HANDLER_NAME = "voice-command-json"


def setup_logging():
    """
    Configures structured JSON logging for the service and returns the root logger.

    The first call installs one stdout handler with a JSON formatter
    (timestamp, level, logger name, message, trace_id, span_id) on the root
    logger and the Uvicorn loggers. Later calls, made at import time by each
    module, reuse that handler instead of rebuilding it.
    The level comes from the LOG_LEVEL environment variable (default INFO).
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    root_logger = logging.getLogger()

    if any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        return root_logger

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.set_name(_HANDLER_NAME)
    stream_handler.setFormatter(formatter)

    root_logger.setLevel(level_name)
    root_logger.handlers = [stream_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level_name)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    return root_logger
