import logging
import sys


logger = logging.getLogger("ciclone")

# Handlers installed by configure_logging, replaced on every call
_handlers = []


def configure_logging(debug: bool):
    """
    Send progress (including the `+ git ...` trace) to stdout and errors to stderr.

    Handlers are rebuilt on every call so they write to the streams that are
    current at the time, which is what click's test runner relies on.
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in _handlers:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(message)s")

    progress = logging.StreamHandler(sys.stdout)
    progress.addFilter(lambda record: record.levelno < logging.ERROR)

    errors = logging.StreamHandler(sys.stderr)
    errors.setLevel(logging.ERROR)

    _handlers[:] = [progress, errors]
    for handler in _handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def reset_logging():
    """Detach the handlers installed by configure_logging."""
    for handler in _handlers:
        logger.removeHandler(handler)
    _handlers.clear()
