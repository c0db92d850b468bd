"""Tests for swagger_explorer.parser.loader."""

from __future__ import annotations

import json
import textwrap

import pytest

from swagger_explorer.exceptions import SpecParseError
from swagger_explorer.parser.loader import has_yaml_marker, is_spec_url, parse_spec_text


# ---------------------------------------------------------------------------
# is_spec_url
# ---------------------------------------------------------------------------


class TestIsSpecUrl:
    """Candidate URL detection is a plain substring check."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://petstore.swagger.io/v2/swagger.json",
            "https://api.example.com/openapi.yaml",
            "https://example.com/docs/swagger-ui-bundle.js",
            "https://example.com/v3/api-docs?group=openapi",
        ],
    )
    def test_matches(self, url: str) -> None:
        assert is_spec_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/api-docs",
            "https://example.com/index.html",
            "https://example.com/OpenAPI.json",
        ],
    )
    def test_does_not_match(self, url: str) -> None:
        assert is_spec_url(url) is False


# ---------------------------------------------------------------------------
# parse_spec_text
# ---------------------------------------------------------------------------


class TestParseSpecText:
    """JSON first, YAML only behind a marker, mappings only."""

    def test_parses_json(self, petstore_text: str) -> None:
        result = parse_spec_text(petstore_text)
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore API"

    def test_parses_yaml(self, swagger2_text: str) -> None:
        result = parse_spec_text(swagger2_text)
        assert result["swagger"] == "2.0"
        assert list(result["definitions"]) == ["Order", "Customer"]

    def test_yaml_dates_become_strings(self, swagger2_text: str) -> None:
        result = parse_spec_text(swagger2_text)
        assert result["info"]["x-released"] == "2019-03-01"
        json.dumps(result)

    def test_openapi_yaml(self) -> None:
        content = textwrap.dedent("""\
            openapi: 3.1.0
            info:
              title: YAML Test
              version: "1.0.0"
            paths: {}
        """)
        result = parse_spec_text(content)
        assert result["openapi"] == "3.1.0"
        assert result["paths"] == {}

    def test_javascript_asset_rejected(self) -> None:
        with pytest.raises(SpecParseError):
            parse_spec_text("window.onload = function () { SwaggerUIBundle({}) };")

    def test_css_asset_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="neither JSON nor a YAML spec"):
            parse_spec_text(".swagger-ui { color: red; }")

    def test_invalid_yaml_with_marker_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid YAML"):
            parse_spec_text("openapi: 3.0.0\npaths: {unclosed: [\n")

    def test_self_referencing_yaml_rejected(self) -> None:
        text = "openapi: 3.0.0\nnode: &a\n  self: *a\n"
        with pytest.raises(SpecParseError, match="not JSON-compatible"):
            parse_spec_text(text)

    def test_json_array_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="list"):
            parse_spec_text("[1, 2, 3]")

    def test_json_scalar_rejected(self) -> None:
        with pytest.raises(SpecParseError):
            parse_spec_text('"swagger"')

    def test_empty_json_object_accepted(self) -> None:
        assert parse_spec_text("{}") == {}


class TestHasYamlMarker:

    def test_openapi_marker(self) -> None:
        assert has_yaml_marker("openapi: 3.0.0") is True

    def test_swagger_marker(self) -> None:
        assert has_yaml_marker('swagger: "2.0"') is True

    def test_no_marker(self) -> None:
        assert has_yaml_marker("title: nothing here") is False
