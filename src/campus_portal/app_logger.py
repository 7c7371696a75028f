import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LEVEL_ENV = "CAMPUS_PORTAL_LOG_LEVEL"


def setup_logging(level: str | None = None) -> logging.Logger:
    # The env override beats the settings module's LOG_LEVEL
    name = os.getenv(LEVEL_ENV) or level or "INFO"
    lvl = getattr(logging, name.strip().upper(), logging.INFO)

    logger = logging.getLogger("campus_portal")
    logger.setLevel(lvl)

    # Avoid duplicate console handlers when create_app runs more than once
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    for h in logger.handlers:
        h.setLevel(lvl)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger("campus_portal")
    return base.getChild(name) if name else base
