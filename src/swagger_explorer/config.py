"""Configuration resolution with environment variables and CLI precedence.

The service has no configuration files: every setting comes from a CLI
flag, an environment variable, or a default declared on
:class:`~swagger_explorer.models.ExplorerConfig`.

* **Precedence resolution** -- :func:`resolve_config` merges CLI flags and
  environment variables into the final effective configuration.
* **Normalisation** -- :func:`normalize_base_url` turns ``docs/``,
  ``/docs/`` and ``/docs`` into the same route prefix.

Recognised environment variables:

==============================  ==========================================
``BASE_URL``                    Prefix for the ``/api`` routes
``AUTH_TOKEN``                  Bearer token enabling the auth gate
``PORT``                        Explicit listen port
``EXPLORER_HOST``               Listen interface
``EXPLORER_DISCOVERY_TIMEOUT``  Seconds to wait for a spec response
``EXPLORER_NAVIGATION_TIMEOUT`` Seconds allowed for page navigation
``EXPLORER_HEADLESS``           ``0``/``false`` to show the browser window
==============================  ==========================================
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from swagger_explorer.exceptions import ConfigError
from swagger_explorer.models import ExplorerConfig

_FALSY = frozenset({"0", "false", "no", "off"})


def normalize_base_url(base_url: Optional[str]) -> str:
    """Return *base_url* with a single leading slash and no trailing slash.

    An empty or ``None`` value, or a bare ``/``, yields ``""`` so that routes
    are mounted at the root.
    """
    if not base_url:
        return ""
    stripped = base_url.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def _env(name: str) -> Optional[str]:
    """Return the environment variable *name*, treating empty strings as unset."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value


def _parse_port(raw: str, source: str) -> int:
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid port '{raw}' (source: {source})") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"Port {port} is out of range 1-65535 (source: {source})")
    return port


def _parse_seconds(raw: str, source: str) -> float:
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid duration '{raw}' (source: {source})") from exc
    if seconds <= 0:
        raise ConfigError(f"Duration must be positive, got {seconds} (source: {source})")
    return seconds


def resolve_config(
    cli_host: Optional[str] = None,
    cli_port: Optional[int] = None,
    cli_base_url: Optional[str] = None,
    cli_auth_token: Optional[str] = None,
    cli_discovery_timeout: Optional[float] = None,
    cli_navigation_timeout: Optional[float] = None,
    cli_headless: Optional[bool] = None,
) -> ExplorerConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_*`` arguments)
        2. Environment variables (``BASE_URL``, ``AUTH_TOKEN``, ``PORT``,
           ``EXPLORER_*``)
        3. Defaults declared on :class:`~swagger_explorer.models.ExplorerConfig`

    Returns:
        The effective :class:`~swagger_explorer.models.ExplorerConfig`.

    Raises:
        ConfigError: If a port or duration is malformed or out of range.
    """
    values: dict[str, Any] = {}

    # 2. Environment variables
    env_base_url = _env("BASE_URL")
    if env_base_url is not None:
        values["base_url"] = env_base_url
    env_token = _env("AUTH_TOKEN")
    if env_token is not None:
        values["auth_token"] = env_token
    env_port = _env("PORT")
    if env_port is not None:
        values["port"] = _parse_port(env_port, "env:PORT")
    env_host = _env("EXPLORER_HOST")
    if env_host is not None:
        values["host"] = env_host
    env_discovery = _env("EXPLORER_DISCOVERY_TIMEOUT")
    if env_discovery is not None:
        values["discovery_timeout"] = _parse_seconds(
            env_discovery, "env:EXPLORER_DISCOVERY_TIMEOUT"
        )
    env_navigation = _env("EXPLORER_NAVIGATION_TIMEOUT")
    if env_navigation is not None:
        values["navigation_timeout"] = _parse_seconds(
            env_navigation, "env:EXPLORER_NAVIGATION_TIMEOUT"
        )
    env_headless = _env("EXPLORER_HEADLESS")
    if env_headless is not None:
        values["headless"] = env_headless.strip().lower() not in _FALSY

    # 1. CLI flags (highest precedence)
    if cli_base_url is not None:
        values["base_url"] = cli_base_url
    if cli_auth_token is not None:
        values["auth_token"] = cli_auth_token
    if cli_port is not None:
        values["port"] = _parse_port(str(cli_port), "--port")
    if cli_host is not None:
        values["host"] = cli_host
    if cli_discovery_timeout is not None:
        values["discovery_timeout"] = _parse_seconds(
            str(cli_discovery_timeout), "--discovery-timeout"
        )
    if cli_navigation_timeout is not None:
        values["navigation_timeout"] = _parse_seconds(
            str(cli_navigation_timeout), "--navigation-timeout"
        )
    if cli_headless is not None:
        values["headless"] = cli_headless

    values["base_url"] = normalize_base_url(values.get("base_url"))

    try:
        return ExplorerConfig.model_validate(values)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
