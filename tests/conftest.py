"""Shared test fixtures for swagger_explorer.

Provides spec fixtures loaded from ``tests/fixtures``, an isolated
environment for configuration tests, output/logging reset between tests,
and page factories built on the stand-ins in ``fakes.py``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest
from fakes import FakePage, FakeResponse
from rich.logging import RichHandler

from swagger_explorer.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and root log handlers after every test.

    ``configure_logging`` binds a RichHandler to the console of the current
    OutputManager, which under Typer's CliRunner points at a stream that is
    closed once the invocation finishes.
    """
    root = logging.getLogger()
    level = root.level
    yield
    reset_output()
    for handler in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager as the global output."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_text() -> str:
    """Raw petstore 3.0 body as served over the network."""
    return (FIXTURES_DIR / "petstore_3.0.json").read_text(encoding="utf-8")


@pytest.fixture
def petstore_raw(petstore_text: str) -> dict[str, Any]:
    """Parsed petstore 3.0 spec dict."""
    return json.loads(petstore_text)


@pytest.fixture
def swagger2_text() -> str:
    """Raw Swagger 2.0 YAML body."""
    return (FIXTURES_DIR / "swagger_2.0.yaml").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every environment variable the service reads."""
    for var in [
        "BASE_URL",
        "AUTH_TOKEN",
        "PORT",
        "EXPLORER_HOST",
        "EXPLORER_DISCOVERY_TIMEOUT",
        "EXPLORER_NAVIGATION_TIMEOUT",
        "EXPLORER_HEADLESS",
        "EXPLORER_SERVER_URL",
    ]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Page factories
# ---------------------------------------------------------------------------


@pytest.fixture
def spec_page_factory(petstore_text: str) -> Callable[[], FakePage]:
    """Factory for pages that serve the petstore spec at ``/openapi.json``."""

    def _factory() -> FakePage:
        return FakePage(
            responses=(
                FakeResponse("https://docs.example.com/swagger-ui.css", "body { }"),
                FakeResponse("https://docs.example.com/openapi.json", petstore_text),
            )
        )

    return _factory


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
