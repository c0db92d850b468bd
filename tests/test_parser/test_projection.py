"""Tests for swagger_explorer.parser.projection."""

from __future__ import annotations

from typing import Any

import pytest

from swagger_explorer.models import ExploreOptions, SpecDocument
from swagger_explorer.parser.loader import parse_spec_text
from swagger_explorer.parser.projection import extract_responses, project


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------


class TestProjectPaths:
    """Path inventory and method filtering."""

    def test_lists_every_path_in_order(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(paths=True))
        assert [entry["path"] for entry in result["paths"]] == [
            "/pets",
            "/pets/{petId}",
            "/store/inventory",
        ]
        assert "schemas" not in result

    def test_methods_are_path_item_keys(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(paths=True))
        assert result["paths"][0] == {"path": "/pets", "methods": ["get", "post"]}
        assert result["paths"][1]["methods"] == ["parameters", "get", "DELETE"]

    def test_method_filter(self, petstore_raw: dict[str, Any]) -> None:
        options = ExploreOptions(paths=True, method_filter=["post"])
        result = project(petstore_raw, options)
        assert result["paths"] == [{"path": "/pets", "methods": ["get", "post"]}]

    def test_method_filter_is_case_insensitive(self, petstore_raw: dict[str, Any]) -> None:
        options = ExploreOptions.model_validate({"paths": True, "methodFilter": ["Delete"]})
        result = project(petstore_raw, options)
        assert [entry["path"] for entry in result["paths"]] == ["/pets/{petId}"]

    def test_empty_filter_keeps_everything(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(paths=True, method_filter=[]))
        assert len(result["paths"]) == 3

    def test_filter_without_matches(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(paths=True, method_filter=["patch"]))
        assert result == {"paths": []}

    def test_missing_paths(self) -> None:
        result = project({"openapi": "3.0.0"}, ExploreOptions(paths=True))
        assert result == {"paths": []}

    def test_non_mapping_path_item(self) -> None:
        result = project({"paths": {"/broken": None}}, ExploreOptions(paths=True))
        assert result == {"paths": [{"path": "/broken", "methods": []}]}


class TestProjectSchemas:
    """Schema name inventory for OpenAPI 3 and Swagger 2."""

    def test_component_schemas(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(schemas=True))
        assert result == {"schemas": ["Pet", "Pets", "Error"]}

    def test_swagger2_definitions(self, swagger2_text: str) -> None:
        result = project(parse_spec_text(swagger2_text), ExploreOptions(schemas=True))
        assert result == {"schemas": ["Order", "Customer"]}

    def test_components_win_over_definitions(self) -> None:
        doc = {
            "components": {"schemas": {"A": {}}},
            "definitions": {"B": {}},
        }
        assert project(doc, ExploreOptions(schemas=True)) == {"schemas": ["A"]}

    def test_empty_component_schemas_do_not_fall_back(self) -> None:
        doc = {"components": {"schemas": {}}, "definitions": {"B": {}}}
        assert project(doc, ExploreOptions(schemas=True)) == {"schemas": []}

    def test_no_schemas_anywhere(self) -> None:
        assert project({}, ExploreOptions(schemas=True)) == {"schemas": []}


class TestProjectOptions:

    def test_neither_option(self, petstore_raw: dict[str, Any]) -> None:
        assert project(petstore_raw, ExploreOptions()) == {}

    def test_both_options(self, petstore_raw: dict[str, Any]) -> None:
        result = project(petstore_raw, ExploreOptions(paths=True, schemas=True))
        assert set(result) == {"paths", "schemas"}

    def test_accepts_spec_document(self, petstore_raw: dict[str, Any]) -> None:
        doc = SpecDocument.from_raw(petstore_raw)
        result = project(doc, ExploreOptions(schemas=True))
        assert result["schemas"] == ["Pet", "Pets", "Error"]


# ---------------------------------------------------------------------------
# extract_responses
# ---------------------------------------------------------------------------


class TestExtractResponses:
    """Normalised responses of one operation."""

    def test_codes_in_document_order(self, petstore_raw: dict[str, Any]) -> None:
        result = extract_responses(petstore_raw, "/pets", "get")
        assert [entry["code"] for entry in result] == ["200", "default"]

    def test_format_fields(self, petstore_raw: dict[str, Any]) -> None:
        first = extract_responses(petstore_raw, "/pets", "get")[0]
        assert first["description"] == "A paged array of pets"
        assert first["formats"] == [
            {
                "contentType": "application/json",
                "schema": {
                    "type": "array",
                    "items": {"$ref": "#/components/schemas/Pet"},
                },
                "example": [{"id": 1, "name": "Rex"}],
            }
        ]

    def test_absent_fields_are_omitted(self, petstore_raw: dict[str, Any]) -> None:
        second = extract_responses(petstore_raw, "/pets", "get")[1]
        assert set(second["formats"][0]) == {"contentType", "schema"}

    def test_multiple_content_types(self, petstore_raw: dict[str, Any]) -> None:
        entry = extract_responses(petstore_raw, "/pets/{petId}", "get")[0]
        assert [fmt["contentType"] for fmt in entry["formats"]] == [
            "application/json",
            "application/xml",
        ]

    def test_no_content(self, petstore_raw: dict[str, Any]) -> None:
        result = extract_responses(petstore_raw, "/pets", "post")
        assert result == [{"code": "201", "description": "Null response", "formats": []}]

    def test_missing_description(self) -> None:
        doc = {"paths": {"/a": {"get": {"responses": {"200": {}}}}}}
        assert extract_responses(doc, "/a", "get") == [
            {"code": "200", "description": "", "formats": []}
        ]

    def test_integer_codes_stringified(self) -> None:
        doc = {"paths": {"/a": {"get": {"responses": {200: {"description": "ok"}}}}}}
        assert extract_responses(doc, "/a", "get")[0]["code"] == "200"

    def test_swagger2_has_no_formats(self, swagger2_text: str) -> None:
        result = extract_responses(parse_spec_text(swagger2_text), "/orders", "get")
        assert result == [{"code": "200", "description": "Orders", "formats": []}]

    @pytest.mark.parametrize(
        "path, method",
        [
            ("/unknown", "get"),
            ("/pets", "put"),
            ("/pets", "GET"),
        ],
    )
    def test_missing_segments(self, petstore_raw: dict[str, Any], path: str, method: str) -> None:
        assert extract_responses(petstore_raw, path, method) == []

    def test_operation_without_responses(self) -> None:
        doc = {"paths": {"/a": {"get": {"summary": "nothing"}}}}
        assert extract_responses(doc, "/a", "get") == []

    def test_non_mapping_document(self) -> None:
        assert extract_responses([], "/a", "get") == []
