import sys
import logging

def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Configure the 'stlread' logger with a stdout handler and an optional file handler."""
    logger = logging.getLogger('stlread')
    logger.setLevel(level)
    for handler in list(logger.handlers):  # avoid duplicate records on repeated setup
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
