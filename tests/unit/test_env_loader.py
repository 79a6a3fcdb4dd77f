"""Unit tests for environment loader behavior.

These tests exercise reading from a ``.env`` file via python-dotenv and ensure
idempotent behavior when files are missing.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from subcue.utils import env_loader


@pytest.fixture(autouse=True)
def _clear_cache() -> Iterator[None]:
    env_loader.load_project_env.cache_clear()
    yield
    env_loader.load_project_env.cache_clear()


def test_load_project_env_calls_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """python-dotenv is invoked without overriding existing variables.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("FOO=bar\n")
    calls: list[dict[str, object]] = []

    def fake_load_dotenv(**kwargs: object) -> bool:
        calls.append(kwargs)
        return True

    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setattr(env_loader, "load_dotenv", fake_load_dotenv)

    assert env_loader.load_project_env(force=True)
    assert calls == [{"dotenv_path": env_file, "override": False}]


def test_load_project_env_sets_variables(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SUBCUE_TEST_HELLO=world\n")
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    # Registers removal of the variable on teardown
    monkeypatch.setenv("SUBCUE_TEST_HELLO", "placeholder")
    monkeypatch.delenv("SUBCUE_TEST_HELLO")

    env_loader.load_project_env()

    assert os.getenv("SUBCUE_TEST_HELLO") == "world"


def test_load_project_env_no_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Missing env files should not crash the loader."""
    monkeypatch.setattr(env_loader, "_ENV_FILE", tmp_path / "missing.env")
    assert env_loader.load_project_env() is False


def test_load_project_env_is_cached(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("FOO=bar\n")
    calls: list[object] = []

    def fake_load_dotenv(**kwargs: object) -> bool:
        calls.append(kwargs)
        return True

    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setattr(env_loader, "load_dotenv", fake_load_dotenv)

    env_loader.load_project_env()
    env_loader.load_project_env()

    assert len(calls) == 1
