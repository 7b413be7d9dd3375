# backend/app/core/logging_setup.py
import logging

from . import config

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Set up the root logger once; later calls only adjust the level."""
    global _configured
    level_name = (level or config.LOG_LEVEL).upper()
    lvl = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(lvl)
    if _configured:
        return

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
        root.addHandler(handler)

    # SQL echo only when explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level_name == "DEBUG" else logging.WARNING
    )
    # passlib logs a trapped bcrypt version warning on newer bcrypt builds
    logging.getLogger("passlib").setLevel(logging.ERROR)
    _configured = True
