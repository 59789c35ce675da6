"""Shared pytest fixtures for erdomain tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from erdomain.core import ERDomain
from erdomain.services.domain import DomainService
from erdomain.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def domain() -> ERDomain:
    """Empty in-memory domain."""
    return ERDomain()


@pytest.fixture
def service(domain: ERDomain) -> DomainService:
    """DomainService over the ``domain`` fixture."""
    return DomainService(domain)


@pytest.fixture
def _isolated_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path]:
    """Run from an empty temp directory with config discovery disabled.

    ERDOMAIN_CONFIG points at a missing file, so a stray ``erdomain.toml``
    up the tree is never picked up. Use via
    ``@pytest.mark.usefixtures("_isolated_root")`` on CLI test classes.
    """
    monkeypatch.setenv("ERDOMAIN_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture(autouse=True)
def _restore_process_state() -> Generator[None]:
    """Undo what a CLI invocation sets up for the whole process.

    The root group configures logging and, with ``-v``, enables telemetry.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    erd_level = logging.getLogger("erdomain").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("erdomain").setLevel(erd_level)
