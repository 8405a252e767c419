import logging


def setup_logger(name: str = "tweetpurge", level: str = "INFO") -> logging.Logger:
    """
    Set up the package logger. Module loggers created with
    logging.getLogger(__name__) inside the package propagate to it.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicate handlers when the app factory runs more than once
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s - %(message)s'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger
