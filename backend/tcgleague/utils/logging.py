import logging

from tcgleague.config import config


def create_logger(level: int) -> logging.Logger:
    logger = logging.getLogger("tcgleague")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")
        )
        logger.addHandler(handler)

    return logger


logger = create_logger(logging.getLevelNamesMapping()[config.log_level])
