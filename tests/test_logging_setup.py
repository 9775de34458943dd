"""Tests for logging configuration helpers."""

import logging

import pytest

from stockledger.logging_setup import get_logger, parse_level


def test_parse_level_names_and_numbers():
    assert parse_level("info") == logging.INFO
    assert parse_level(" DEBUG ") == logging.DEBUG
    assert parse_level("15") == 15
    assert parse_level(logging.ERROR) == logging.ERROR


def test_parse_level_from_environment(monkeypatch):
    monkeypatch.setenv("STOCKLEDGER_LOG_LEVEL", "error")
    assert parse_level(None) == logging.ERROR


def test_parse_level_default(monkeypatch):
    monkeypatch.delenv("STOCKLEDGER_LOG_LEVEL", raising=False)
    assert parse_level(None) == logging.WARNING


def test_parse_level_unknown():
    with pytest.raises(ValueError, match="Unknown log level"):
        parse_level("chatty")


def test_get_logger_is_namespaced():
    logger = get_logger("stockledger.domain.ledger")
    assert logger.name == "stockledger.domain.ledger"
    assert logging.getLogger("stockledger").handlers
