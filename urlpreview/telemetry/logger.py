"""Logger factory shared by the codec modules."""
import logging


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
