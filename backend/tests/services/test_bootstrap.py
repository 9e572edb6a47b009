"""Startup - tests that configure() applies logging settings and wires the service."""

import logging

import pytest

from keygate.config import Settings
from keygate.infrastructure.observability import HANDLER_NAME, JSONFormatter, TextFormatter
from keygate.services.bootstrap import configure
from keygate.services.insert_service import KeyInsertService
from tests.key_factory import NOW, days_ago, make_context, make_key


class _InMemoryRepository:
    def __init__(self):
        self.inserts = []

    def insert_keys(self, keys, received_at):
        self.inserts.append((list(keys), received_at))


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _keygate_handler(root):
    return next(h for h in root.handlers if h.get_name() == HANDLER_NAME)


def test_configure_applies_json_format_and_level(root_logger):
    configure(_InMemoryRepository(), Settings(log_level="WARNING", log_format="json"))
    assert isinstance(_keygate_handler(root_logger).formatter, JSONFormatter)
    assert root_logger.level == logging.WARNING


def test_configure_applies_text_format(root_logger):
    configure(_InMemoryRepository(), Settings(log_level="DEBUG", log_format="text"))
    assert isinstance(_keygate_handler(root_logger).formatter, TextFormatter)
    assert root_logger.level == logging.DEBUG


def test_configure_reads_environment(root_logger, monkeypatch):
    monkeypatch.setenv("KEYGATE_LOG_FORMAT", "text")
    configure(_InMemoryRepository())
    assert isinstance(_keygate_handler(root_logger).formatter, TextFormatter)


def test_configured_service_stores_accepted_keys(root_logger):
    repository = _InMemoryRepository()
    service = configure(repository, Settings())
    assert isinstance(service, KeyInsertService)
    assert service.pipeline.frozen

    keys = [make_key(days_ago(1), seed=1), make_key(days_ago(2), seed=2, fake=True)]
    accepted = service.insert(keys, make_context())
    assert accepted == keys[:1]
    assert repository.inserts == [(keys[:1], NOW)]
