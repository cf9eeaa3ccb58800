import logging

import pytest

from thompson_nfa import compile_pattern, to_postfix
from thompson_nfa.log import LOG_LEVEL_ENV, configure_logging


@pytest.fixture
def basic_config(monkeypatch):
    seen = {}
    monkeypatch.setattr("logging.basicConfig", lambda **kw: seen.update(kw))
    return seen


def test_level_from_environment(monkeypatch, basic_config):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    configure_logging()
    assert basic_config["level"] == logging.DEBUG


def test_default_level_is_warning(monkeypatch, basic_config):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    configure_logging()
    assert basic_config["level"] == logging.WARNING


def test_explicit_level_overrides_environment(monkeypatch, basic_config):
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    configure_logging("error")
    assert basic_config["level"] == logging.ERROR


def test_unknown_level_falls_back_to_warning(monkeypatch, basic_config):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    configure_logging("chatty")
    assert basic_config["level"] == logging.WARNING


def test_library_logs_only_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="thompson_nfa")
    graph = compile_pattern("a+b+")
    graph.is_match("ab")
    to_postfix("a|b")

    records = [r for r in caplog.records if r.name.startswith("thompson_nfa")]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)
    assert any(r.getMessage().startswith("compiled 'a+b+.' into 8 states") for r in records)


def test_library_is_silent_above_debug(caplog):
    caplog.set_level(logging.INFO, logger="thompson_nfa")
    compile_pattern("a(b|c)*").is_match("abc")
    assert not [r for r in caplog.records if r.name.startswith("thompson_nfa")]
