"""Logging for the emojico CLI: a debug log file in the temp dir plus a stderr stream."""

import logging
import os
import sys
import tempfile

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Path of the current debug log, or None when the temp dir is not writable.
LOG_FILE_PATH: str | None = None


def _file_handler(fmt: logging.Formatter) -> logging.Handler | None:
    global LOG_FILE_PATH
    try:
        log_dir = os.path.join(tempfile.gettempdir(), "emojico")
        os.makedirs(log_dir, exist_ok=True)
        path = os.path.join(log_dir, "emojico.log")
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        LOG_FILE_PATH = None
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(fmt)
    LOG_FILE_PATH = path
    return handler


def setup_logging(verbose: bool = False) -> None:
    """(Re)configure the emojico logger. stderr shows INFO, or DEBUG with verbose."""
    logger = logging.getLogger("emojico")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    fh = _file_handler(fmt)
    if fh is not None:
        logger.addHandler(fh)

    eh = logging.StreamHandler(sys.stderr)
    eh.setLevel(logging.DEBUG if verbose else logging.INFO)
    eh.setFormatter(fmt)
    logger.addHandler(eh)

    logger.debug("Logging started; file: %s", LOG_FILE_PATH or "(none)")
