"""Derive filtered views from a discovered specification document.

Both public functions are pure: they perform no I/O and never raise on a
malformed document. Absent or oddly shaped regions of the document simply
produce empty results.

* :func:`project` -- path/method inventory and schema name inventory.
* :func:`extract_responses` -- the normalised ``responses`` map of one
  operation.

Either function accepts a raw ``dict`` or a
:class:`~swagger_explorer.models.SpecDocument`; key order in the results
follows the document's own key order.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from swagger_explorer.models import (
    ExploreOptions,
    ExploreResult,
    PathEntry,
    ResponseEntry,
    ResponseFormat,
    SpecDocument,
)

Document = Union[SpecDocument, Mapping[str, Any]]

_FORMAT_FIELDS = ("schema", "example", "encoding")


def project(doc: Document, options: ExploreOptions) -> dict[str, Any]:
    """Build the explore result for *doc* according to *options*.

    * ``options.paths`` -- one ``{"path", "methods"}`` entry per path item.
      When ``options.method_filter`` is non-empty, a path is kept only if at
      least one of its keys, lower-cased, appears in the filter. ``methods``
      always lists every key of the kept path item.
    * ``options.schemas`` -- the names under ``components.schemas``, falling
      back to the Swagger 2.0 ``definitions`` map.

    Args:
        doc: The discovered document.
        options: Which projections to include.

    Returns:
        A JSON-ready dict; ``{}`` when neither option is set.
    """
    spec = SpecDocument.from_raw(doc)
    result = ExploreResult()

    if options.paths:
        method_filter = set(options.method_filter or ())
        entries: list[PathEntry] = []
        for path, path_item in (spec.paths or {}).items():
            methods = [str(key) for key in path_item] if isinstance(path_item, dict) else []
            if method_filter and not any(m.lower() in method_filter for m in methods):
                continue
            entries.append(PathEntry(path=str(path), methods=methods))
        result.paths = entries

    if options.schemas:
        schemas = None
        if spec.components is not None:
            schemas = spec.components.schemas
        if schemas is None:
            schemas = spec.definitions or {}
        result.schemas = list(schemas)

    return result.model_dump(exclude_unset=True)


def extract_responses(doc: Document, path: str, method: str) -> list[dict[str, Any]]:
    """Normalise ``paths[path][method].responses`` of *doc*.

    Each status code becomes ``{"code", "description", "formats"}`` where
    ``formats`` holds one ``{"contentType", "schema", "example",
    "encoding"}`` entry per content type. ``schema``, ``example`` and
    ``encoding`` only appear when the document declares them.

    Args:
        doc: The discovered document.
        path: Exact path key, e.g. ``"/pets/{petId}"``.
        method: Exact method key as written in the document, e.g. ``"get"``.

    Returns:
        A list of JSON-ready dicts; ``[]`` if any segment is missing.
    """
    spec = SpecDocument.from_raw(doc)
    path_item = (spec.paths or {}).get(path)
    operation = path_item.get(method) if isinstance(path_item, dict) else None
    responses = operation.get("responses") if isinstance(operation, dict) else None
    if not isinstance(responses, dict):
        return []

    entries: list[dict[str, Any]] = []
    for code, response in responses.items():
        response = response if isinstance(response, dict) else {}
        content = response.get("content")
        formats: list[ResponseFormat] = []
        if isinstance(content, dict):
            for content_type, media in content.items():
                media = media if isinstance(media, dict) else {}
                fields = {key: media[key] for key in _FORMAT_FIELDS if key in media}
                formats.append(ResponseFormat(contentType=str(content_type), **fields))

        description = response.get("description")
        entry = ResponseEntry(
            code=str(code),
            description=description if isinstance(description, str) else "",
            formats=formats,
        )
        entries.append(entry.model_dump(by_alias=True, exclude_unset=True))
    return entries
