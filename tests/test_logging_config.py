"""
Unit tests for libs/core/logging_config.py
"""

import logging

import pytest

import libs.core.logging_config as logging_config


@pytest.fixture
def fresh_root(monkeypatch):
    """Unconfigured logging state, restored afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    monkeypatch.setattr(logging_config, "_configured", False)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_setup_writes_system_log(fresh_root, tmp_path):
    logging_config.setup_logging(level="debug", log_dir=tmp_path / "logs")

    assert fresh_root.level == logging.DEBUG
    assert (tmp_path / "logs" / "system.log").exists()
    assert logging.getLogger("sse_starlette").level == logging.WARNING


def test_setup_runs_once(fresh_root, tmp_path):
    logging_config.setup_logging(log_to_file=False)
    handlers = list(fresh_root.handlers)

    logging_config.setup_logging(log_dir=tmp_path)

    assert fresh_root.handlers == handlers
    assert not (tmp_path / "system.log").exists()


def test_log_mutation_format(caplog):
    logger = logging.getLogger("libs.tracker.service")
    with caplog.at_level(logging.INFO, logger="libs.tracker.service"):
        logging_config.log_mutation(logger, "claim", "Iron Ore", "claimer=Bob | claimed=30")
    assert caplog.messages == ["[Mutation] CLAIM | item=Iron Ore | claimer=Bob | claimed=30"]
