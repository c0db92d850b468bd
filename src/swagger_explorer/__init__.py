"""swagger_explorer -- discover and summarise Swagger/OpenAPI specs behind live web pages.

The service drives a headless browser to a documentation page, captures the
specification it loads (from the network or from the Swagger UI state held
in the page), and answers questions about it over a small JSON HTTP API:
which paths and methods exist, which schemas are declared, and what a given
operation can respond with.

Typical workflow::

    swagger-explorer serve --auth-token s3cret   # start the HTTP API
    swagger-explorer mcp                         # expose it as MCP tools

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for requests, results and the spec document.
    config: Environment and CLI flag resolution into :class:`ExplorerConfig`.
    exceptions: Exception hierarchy with HTTP status and exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    formatting: ``minimal`` / ``detailed`` response envelopes.
    output: stderr diagnostics and logging setup with Rich support.
    parser: Body parsing and the path, schema and response projections.
    browser: Chromium engine and two-tier spec discovery.
    auth: Bearer token gate and ASGI middleware.
    server: FastAPI application, routes and service lifecycle.
    client: Async httpx client for a running service.
    mcp_server: MCP stdio adapter built on that client.
"""

__version__ = "0.2.3"
