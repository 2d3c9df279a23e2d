import logging

from squadboard.config import environment


def create_logger(level: int) -> logging.Logger:
    logger = logging.getLogger("squadboard")
    logger.setLevel(level)

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger


logger = create_logger(environment.get_log_level())
