"""Tests for the Typer CLI and the console-script entry point."""

from __future__ import annotations

import sys

import pytest

from swagger_explorer import __version__
from swagger_explorer.app import app, main
from swagger_explorer.models import ExplorerConfig


class TestRootOptions:

    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"swagger-explorer {__version__}" in result.output

    def test_help_lists_commands(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.output
        assert "mcp" in result.output


class TestServeCommand:

    def test_flags_reach_config(self, cli_runner, clean_env, monkeypatch) -> None:
        captured: list[ExplorerConfig] = []

        async def fake_serve(config: ExplorerConfig) -> None:
            captured.append(config)

        monkeypatch.setattr("swagger_explorer.server.runner.serve", fake_serve)
        result = cli_runner.invoke(
            app,
            [
                "serve",
                "--port", "4100",
                "--base-url", "docs/",
                "--auth-token", "s3cret",
                "--discovery-timeout", "1.5",
                "--headed",
            ],
        )
        assert result.exit_code == 0, result.output
        config = captured[0]
        assert config.port == 4100
        assert config.base_url == "/docs"
        assert config.auth_token == "s3cret"
        assert config.discovery_timeout == 1.5
        assert config.headless is False

    def test_environment_defaults(self, cli_runner, clean_env, monkeypatch) -> None:
        captured: list[ExplorerConfig] = []

        async def fake_serve(config: ExplorerConfig) -> None:
            captured.append(config)

        monkeypatch.setattr("swagger_explorer.server.runner.serve", fake_serve)
        clean_env.setenv("PORT", "5000")
        result = cli_runner.invoke(app, ["serve"])
        assert result.exit_code == 0, result.output
        assert captured[0].port == 5000
        assert captured[0].headless is True


class TestMcpCommand:

    def test_forwards_settings(self, cli_runner, clean_env, monkeypatch) -> None:
        calls: list[tuple] = []
        monkeypatch.setattr(
            "swagger_explorer.mcp_server.run_stdio",
            lambda server_url, base_path="", auth_token=None: calls.append(
                (server_url, base_path, auth_token)
            ),
        )
        clean_env.setenv("AUTH_TOKEN", "s3cret")
        result = cli_runner.invoke(
            app, ["mcp", "--server-url", "http://localhost:4100", "--base-url", "/docs"]
        )
        assert result.exit_code == 0, result.output
        assert calls == [("http://localhost:4100", "/docs", "s3cret")]


class TestMain:

    def test_explorer_error_exit_code(self, clean_env, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sys, "argv", ["swagger-explorer", "--no-color", "serve", "--port", "99999"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2
        assert "out of range" in capsys.readouterr().err

    def test_unexpected_error(self, clean_env, monkeypatch) -> None:
        async def broken_serve(config: ExplorerConfig) -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr("swagger_explorer.server.runner.serve", broken_serve)
        monkeypatch.setattr(sys, "argv", ["swagger-explorer", "--quiet", "serve"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
