"""Canonical Pydantic models shared across all swagger_explorer modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration** -- :class:`ExplorerConfig`, resolved once at startup by
:func:`~swagger_explorer.config.resolve_config`.

**Request bodies** -- :class:`ExploreOptions`, :class:`ExploreRequest` and
:class:`ResponseSchemaRequest`, validated at the HTTP boundary. Required
fields are declared optional here so that the route handlers can answer a
missing ``url`` with the documented ``400`` message instead of a generic
validation report.

**Spec and result shapes** -- :class:`SpecDocument` (a permissive view of a
discovered Swagger 2.0 / OpenAPI 3.x document) and the projection results
:class:`PathEntry`, :class:`ResponseFormat`, :class:`ResponseEntry`, and
:class:`ExploreResult`.

All models use Pydantic v2. Wire names are camelCase (``methodFilter``,
``contentType``) and are declared as aliases; dump with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Configuration ---


class ExplorerConfig(BaseModel):
    """Effective runtime configuration for the explorer service.

    Example::

        ExplorerConfig(base_url="/docs-tools", auth_token="s3cret", port=8080)
    """

    base_url: str = Field(
        default="", description="Prefix inserted before the /api routes"
    )
    auth_token: Optional[str] = Field(
        default=None, description="Bearer token; enables the auth gate when set"
    )
    host: str = Field(default="127.0.0.1", description="Interface to listen on")
    port: Optional[int] = Field(
        default=None, description="Explicit listen port; auto-selected when unset"
    )
    port_range_start: int = Field(
        default=3000, description="First port probed during auto-selection"
    )
    max_port_retries: int = Field(
        default=10, description="Start attempts before giving up on binding"
    )
    discovery_timeout: float = Field(
        default=5.0, description="Seconds to wait for a spec response after load"
    )
    navigation_timeout: float = Field(
        default=30.0, description="Seconds allowed for page navigation"
    )
    headless: bool = Field(default=True, description="Run the browser headless")


# --- Request bodies ---


class ExploreOptions(BaseModel):
    """Which projections to include in an explore result.

    ``methodFilter`` entries are lower-cased on validation so comparisons
    against path-item keys are case-insensitive.
    """

    model_config = ConfigDict(populate_by_name=True)

    paths: bool = False
    schemas: bool = False
    method_filter: Optional[list[str]] = Field(default=None, alias="methodFilter")

    @field_validator("method_filter")
    @classmethod
    def _lowercase_methods(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        return [method.lower() for method in value]


class ExploreRequest(BaseModel):
    """Body of ``POST /api/explore``."""

    url: Optional[str] = None
    options: ExploreOptions = Field(default_factory=ExploreOptions)
    format: Optional[str] = None

    @field_validator("options", mode="before")
    @classmethod
    def _null_options(cls, value: Any) -> Any:
        return {} if value is None else value


class ResponseSchemaRequest(BaseModel):
    """Body of ``POST /api/response-schemas``."""

    url: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None
    format: Optional[str] = None


# --- Discovered specification ---


def _mapping_or_none(value: Any) -> Optional[dict[str, Any]]:
    """Coerce a region of the document to a dict, dropping malformed shapes."""
    return value if isinstance(value, dict) else None


class SpecComponents(BaseModel):
    """The ``components`` object of an OpenAPI 3.x document."""

    model_config = ConfigDict(extra="allow")

    schemas: Optional[dict[str, Any]] = None

    @field_validator("schemas", mode="before")
    @classmethod
    def _coerce_schemas(cls, value: Any) -> Optional[dict[str, Any]]:
        return _mapping_or_none(value)


class SpecDocument(BaseModel):
    """Permissive view of a Swagger 2.0 or OpenAPI 3.x document.

    Only the regions consulted by the projections are typed; every one of
    them is optional and anything that is not a mapping is treated as
    absent. Unknown top-level keys are preserved in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    swagger: Any = None
    openapi: Any = None
    paths: Optional[dict[str, Any]] = None
    components: Optional[SpecComponents] = None
    definitions: Optional[dict[str, Any]] = None

    @field_validator("paths", "definitions", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Optional[dict[str, Any]]:
        return _mapping_or_none(value)

    @field_validator("components", mode="before")
    @classmethod
    def _coerce_components(cls, value: Any) -> Any:
        return _mapping_or_none(value)

    @classmethod
    def from_raw(cls, raw: Any) -> SpecDocument:
        """Build a document from a parsed body; non-mappings become empty documents."""
        if isinstance(raw, SpecDocument):
            return raw
        return cls.model_validate(raw if isinstance(raw, dict) else {})


# --- Projection results ---


class PathEntry(BaseModel):
    """One path with the keys of its path item."""

    path: str
    methods: list[str]


class ExploreResult(BaseModel):
    """Result of :func:`~swagger_explorer.parser.projection.project`.

    Fields are only present in the dumped output when the corresponding
    option was requested (dump with ``exclude_unset=True``).
    """

    paths: Optional[list[PathEntry]] = None
    schemas: Optional[list[str]] = None


class ResponseFormat(BaseModel):
    """One content type under a response, e.g. ``application/json``."""

    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(alias="contentType")
    schema_: Any = Field(default=None, alias="schema")
    example: Any = None
    encoding: Any = None


class ResponseEntry(BaseModel):
    """One status code of an operation's ``responses`` map."""

    code: str
    description: str = ""
    formats: list[ResponseFormat] = Field(default_factory=list)
