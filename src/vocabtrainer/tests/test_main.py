"""Tests for the entry point and logging setup."""
import logging
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vocabtrainer import __main__ as entry
from vocabtrainer.config import settings
from vocabtrainer.logging_config import setup_logging
from vocabtrainer.models.base import init_db
from vocabtrainer.storage.sql import SqlVocabularyCatalog


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


def test_setup_logging_console_only(monkeypatch) -> None:
    monkeypatch.setattr(settings.logging, "dir", None)

    setup_logging("Starting tests", level="debug")

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_with_log_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(settings.logging, "dir", str(tmp_path / "logs"))

    setup_logging(level=logging.INFO)
    logging.getLogger("vocabtrainer").info("hello from the test")

    assert (tmp_path / "logs" / "vocabtrainer.log").exists()
    assert len(logging.getLogger().handlers) == 2


def test_main_prints_reminders(mocker, monkeypatch, capsys) -> None:
    engine = create_engine("sqlite://", poolclass=StaticPool)
    session_factory = sessionmaker(bind=engine)
    monkeypatch.setattr(settings.logging, "dir", None)
    monkeypatch.setattr(settings.monitoring, "enabled", False)
    mocker.patch.object(entry, "init_db", side_effect=lambda: init_db(engine))
    mocker.patch.object(entry, "SessionLocal", session_factory)
    start_monitoring = mocker.patch.object(entry, "start_monitoring")

    init_db(engine)
    seed = session_factory()
    SqlVocabularyCatalog(seed).add_word("apple", "яблуко")
    seed.close()

    entry.main()

    output = capsys.readouterr().out
    assert "Total Words: 1" in output
    assert "Streak: 0 days" in output
    start_monitoring.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__])
