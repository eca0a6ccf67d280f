"""
Store Lifecycle Tests

Verifies:
- open_or_create() builds the root and an empty index
- Reopening never truncates an existing index
- get_eval_store() caches one handle until cache_clear()
- Settings honour the EVAL_STORE_ env prefix
"""

import logging

import pytest

from app.core.config import Settings
from app.core.logging import configure_logging
from app.dependencies import get_eval_store
from evaluation.file_store import LocalFileEvalStore


def test_constructor_touches_nothing(tmp_path):
    store = LocalFileEvalStore(tmp_path / "missing")

    assert not store.root.exists()
    assert store.index_path == (tmp_path / "missing" / "index.txt").resolve()


def test_open_or_create_builds_layout(tmp_path):
    root = tmp_path / "nested" / "evals"

    store = LocalFileEvalStore.open_or_create(root)

    assert root.is_dir()
    assert store.index_path.read_text(encoding="utf-8") == ""
    assert store.record_path("run-1") == root.resolve() / "run-1.json"


@pytest.mark.asyncio
async def test_reopen_keeps_existing_index(tmp_path, make_run):
    store = LocalFileEvalStore.open_or_create(tmp_path)
    await store.save(make_run("run-1"))

    reopened = LocalFileEvalStore.open_or_create(tmp_path)

    assert [k.eval_run_id for k in (await reopened.list()).eval_run_keys] == ["run-1"]
    assert await reopened.load("run-1") == make_run("run-1")


def test_custom_index_file_name(tmp_path):
    store = LocalFileEvalStore.open_or_create(tmp_path, index_file_name="keys.log")

    assert store.index_path == (tmp_path / "keys.log").resolve()
    assert store.index_path.exists()


def test_open_or_create_fails_when_root_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(OSError):
        LocalFileEvalStore.open_or_create(blocker / "evals")


def test_get_eval_store_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    store = get_eval_store()

    assert store.root == (tmp_path / ".genkit" / "evals").resolve()
    assert store.index_path.exists()


def test_get_eval_store_is_cached_until_reset(tmp_path, monkeypatch):
    first_dir = tmp_path / "first"
    second_dir = tmp_path / "second"
    first_dir.mkdir()
    second_dir.mkdir()

    monkeypatch.chdir(first_dir)
    first = get_eval_store()
    monkeypatch.chdir(second_dir)

    assert get_eval_store() is first

    get_eval_store.cache_clear()
    second = get_eval_store()

    assert second is not first
    assert second.root == (second_dir / ".genkit" / "evals").resolve()


def test_settings_env_override(monkeypatch):
    monkeypatch.setenv("EVAL_STORE_EVAL_STORE_ROOT", "/tmp/custom-evals")
    monkeypatch.setenv("EVAL_STORE_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.eval_store_root == "/tmp/custom-evals"
    assert settings.log_level == "DEBUG"
    assert settings.index_file_name == "index.txt"


def test_configure_logging_installs_single_handler():
    root_logger = logging.getLogger()
    saved = root_logger.handlers[:], root_logger.level

    try:
        configure_logging()
        configure_logging()

        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    finally:
        root_logger.handlers[:] = saved[0]
        root_logger.setLevel(saved[1])


def test_configure_logging_sets_store_logger_levels(monkeypatch):
    from app.core import logging as logging_setup

    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    saved_store_levels = {name: logging.getLogger(name).level for name in logging_setup.STORE_LOGGERS}
    monkeypatch.setattr(logging_setup.settings, "store_log_level", "DEBUG")
    monkeypatch.setattr(logging_setup.settings, "log_level", "WARNING")

    try:
        configure_logging()

        assert root_logger.level == logging.WARNING
        assert logging.getLogger("evaluation").level == logging.DEBUG
        assert logging.getLogger("evaluation.file_store").isEnabledFor(logging.DEBUG)
    finally:
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
        for name, level in saved_store_levels.items():
            logging.getLogger(name).setLevel(level)
