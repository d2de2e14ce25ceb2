"""Tests for emojico.log_config."""

import logging

from emojico import log_config


def test_setup_logging_installs_handlers():
    log_config.setup_logging()
    root = logging.getLogger('emojico')
    assert root.level == logging.DEBUG
    stream = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(stream) == 1
    assert stream[0].level == logging.INFO


def test_setup_logging_verbose_and_idempotent():
    log_config.setup_logging(verbose=True)
    log_config.setup_logging(verbose=True)
    root = logging.getLogger('emojico')
    stream = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(stream) == 1
    assert stream[0].level == logging.DEBUG
    if log_config.LOG_FILE_PATH:
        assert log_config.LOG_FILE_PATH.endswith('emojico.log')
