"""
Tests for storeversion.logging module.
"""

from __future__ import annotations

from storeversion.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)


def test_default_global_logger_is_silent():
    assert isinstance(get_global_logger(), SilentLogger)


def test_verbose_logger_skips_debug(capsys):
    logger = get_logger(verbose=True)
    logger.verbose("FETCH", "shown")
    logger.debug("EXTRACT", "hidden")
    assert capsys.readouterr().out == "[FETCH] shown\n"


def test_debug_implies_verbose(capsys):
    logger = DefaultLogger(debug=True)
    logger.verbose("FETCH", "a")
    logger.debug("EXTRACT", "b")
    assert capsys.readouterr().out == "[FETCH] a\n[EXTRACT] b\n"


def test_set_global_logger():
    logger = get_logger(verbose=True)
    set_global_logger(logger)
    assert get_global_logger() is logger
