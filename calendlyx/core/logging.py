import logging

from calendlyx.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "calendlyx"


def _level() -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def setup_logging() -> logging.Logger:
    logging.basicConfig(level=_level(), format=LOG_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_level())
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger(ROOT_LOGGER_NAME)
    if not name:
        return base
    # Module names already carry the package prefix.
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return base.getChild(name)
