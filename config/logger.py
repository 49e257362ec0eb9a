import logging

from pythonjsonlogger.json import JsonFormatter

from config.settings import config

CONSOLE_FORMAT = '%(levelname)s | %(name)s | %(message)s'


def setup_logger(name: str = None, level: str = None, json_output: bool = None) -> logging.Logger:
    """
    Configure the named logger for a boundary layer (CLI or API).

    Engine modules only call logging.getLogger(__name__); handlers are
    attached here once. The default name configures the root logger so
    every module logger reaches the same handler.

    Parameters:
        name (str): Logger name, None for the root logger
        level (str): Level name, defaults to config.LOG_LEVEL
        json_output (bool): Emit JSON lines instead of plain text

    Returns:
        logging.Logger: Configured logger instance
    """
    level = (level or config.LOG_LEVEL).upper()
    if json_output is None:
        json_output = config.LOG_JSON

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if setup is called multiple times
    if logger.handlers:
        logger.handlers.clear()
    if name:
        logger.propagate = False

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if json_output:
        handler.setFormatter(JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'asctime': 'timestamp', 'levelname': 'level'}
        ))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logger.addHandler(handler)
    return logger
