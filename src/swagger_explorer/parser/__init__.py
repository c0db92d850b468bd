"""Spec parser -- parse captured bodies and project discovered documents.

This sub-package holds the pure, I/O-free half of the explorer pipeline:
turning a captured response body into a document, and turning a document
into the views the HTTP API returns.

Typical usage::

    from swagger_explorer.parser import parse_spec_text, project
    from swagger_explorer.models import ExploreOptions

    doc = parse_spec_text(body)
    result = project(doc, ExploreOptions(paths=True, methodFilter=["get"]))

Sub-modules:

* :mod:`~swagger_explorer.parser.loader` -- JSON/YAML body parsing and
  candidate URL detection.
* :mod:`~swagger_explorer.parser.projection` -- path, schema and response
  projections.
"""

from swagger_explorer.parser.loader import is_spec_url, parse_spec_text
from swagger_explorer.parser.projection import extract_responses, project

__all__ = ["is_spec_url", "parse_spec_text", "project", "extract_responses"]
