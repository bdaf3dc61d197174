"""Shared pytest fixtures and test helpers for fieldcheck tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

DEMO_DIR = Path(__file__).resolve().parent.parent / "demo"


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """Undo handler changes made by configure_logging() during CLI runs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("fieldcheck").setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory isolated from any real config.

    The CWD is moved into it and FIELDCHECK_* variables are cleared so
    config discovery only sees files the test writes.
    """
    for var in ("FIELDCHECK_CONFIG", "FIELDCHECK_PROJECT_ROOT", "FIELDCHECK_RULES"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def signup_rules() -> dict[str, Any]:
    """Raw rule table covering every built-in rule."""
    return {
        "name": ["required", {"min_length": [3, "Name is too short."]}, {"max_length": [50]}],
        "email": ["required", {"email": "Email must be valid."}],
        "age": ["required", "int", {"min": [18]}, {"max": [99]}],
        "terms": ["boolean"],
        "birthdate": ["date"],
        "username": [{"regex": [r"^@\w{3,20}$"]}],
        "profile.bio": [{"max_length": [150]}],
    }


@pytest.fixture
def valid_record() -> dict[str, Any]:
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "age": "36",
        "terms": "1",
        "birthdate": "1815-12-10",
        "username": "@ada_l",
        "profile": {"bio": "Mathematician."},
    }


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_json(path: Path, payload: Any) -> Path:
    """Write *payload* as JSON to *path* and return the path."""
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
