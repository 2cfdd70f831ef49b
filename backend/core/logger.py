import logging
import os

_ROOT_NAME = "backend"
_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.getenv("FIBONACCI_LOG_LEVEL", "INFO").upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """Логгер вида ``backend.<name>`` с общим форматом вывода."""
    _configure_root()
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def set_level(level: str) -> None:
    _configure_root().setLevel(level.upper())
