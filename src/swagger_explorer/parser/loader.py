"""Parse captured specification bodies into Python dictionaries.

Network responses observed during discovery arrive as raw text. This module
decides whether such a body is a Swagger/OpenAPI document and converts it
into a dict. It supports both JSON and YAML:

* JSON is always attempted first. Valid JSON is also valid YAML, but JSON
  parsing is stricter and faster.
* YAML is only attempted when the text contains an ``openapi:`` or
  ``swagger:`` marker, so that unrelated assets whose URL merely mentions
  "swagger" (``swagger-ui.css``, ``swagger-ui-bundle.js``) are not mistaken
  for a spec.

The public functions are:

* :func:`is_spec_url` -- whether a response URL is a discovery candidate.
* :func:`parse_spec_text` -- parse a body or raise
  :class:`~swagger_explorer.exceptions.SpecParseError`.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from swagger_explorer.exceptions import SpecParseError

URL_MARKERS = ("swagger", "openapi")
YAML_MARKERS = ("openapi:", "swagger:")


def is_spec_url(url: str) -> bool:
    """Return ``True`` when *url* contains ``swagger`` or ``openapi``."""
    return any(marker in url for marker in URL_MARKERS)


def has_yaml_marker(content: str) -> bool:
    """Return ``True`` when *content* contains an ``openapi:`` or ``swagger:`` key."""
    return any(marker in content for marker in YAML_MARKERS)


def parse_spec_text(content: str) -> dict[str, Any]:
    """Parse a captured body as JSON, falling back to YAML.

    Args:
        content: The raw response text.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the body is not JSON and carries no YAML marker,
            if YAML parsing fails, if the YAML cannot be expressed as JSON,
            or if the result is not a mapping.
    """
    try:
        result = json.loads(content)
    except json.JSONDecodeError as json_error:
        if not has_yaml_marker(content):
            raise SpecParseError(
                f"Body is neither JSON nor a YAML spec: {json_error}"
            ) from json_error
        try:
            result = yaml.safe_load(content)
        except yaml.YAMLError as yaml_error:
            raise SpecParseError(f"Invalid YAML spec: {yaml_error}") from yaml_error
        # YAML timestamps and dates must survive JSON responses.
        try:
            result = json.loads(json.dumps(result, default=str))
        except (ValueError, TypeError) as dump_error:
            raise SpecParseError(
                f"YAML spec is not JSON-compatible: {dump_error}"
            ) from dump_error

    if not isinstance(result, dict):
        raise SpecParseError(
            "Spec must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result
