"""Locate the Swagger/OpenAPI document behind a documentation page.

Discovery runs in two tiers on a page borrowed from the
:class:`~swagger_explorer.browser.engine.BrowserEngine`:

1. **Network** -- a response observer is attached before navigation. Every
   response whose URL mentions ``swagger`` or ``openapi`` is read and handed
   to :func:`~swagger_explorer.parser.loader.parse_spec_text`; the first one
   that parses wins. After the page reaches ``networkidle`` the observer gets
   ``timeout`` more seconds to produce a document.
2. **Page state** -- when the network yields nothing, the page is asked for
   the document Swagger UI keeps in memory under ``window.ui``. This covers
   sites that inline the spec at build time and never fetch it.

The network tier is preferred because it captures the document exactly as
served.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Response

from swagger_explorer.exceptions import DiscoveryError, SpecParseError, UpstreamError
from swagger_explorer.parser.loader import is_spec_url, parse_spec_text

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_TIMEOUT = 5.0

# Swagger UI exposes its instance as ``window.ui``; older builds keep the raw
# document on ``spec.json``, current ones behind ``specSelectors.specJson()``.
SWAGGER_UI_SPEC_SCRIPT = """() => {
    const ui = window.ui;
    if (!ui) {
        return null;
    }
    if (ui.spec && ui.spec.json) {
        return ui.spec.json;
    }
    if (ui.specSelectors && typeof ui.specSelectors.specJson === "function") {
        const spec = ui.specSelectors.specJson();
        return spec && typeof spec.toJS === "function" ? spec.toJS() : spec;
    }
    return null;
}"""


async def discover(
    url: str,
    page: Page,
    timeout: float = DEFAULT_DISCOVERY_TIMEOUT,
) -> dict[str, Any]:
    """Navigate *page* to *url* and return the specification it loads.

    Args:
        url: The documentation page, e.g. ``https://petstore.swagger.io/``.
        page: A fresh page; its response listeners are restored on return.
        timeout: Seconds to keep waiting for a spec response once the page
            has gone network-idle.

    Returns:
        The parsed specification document.

    Raises:
        UpstreamError: If navigation or page evaluation fails.
        DiscoveryError: If neither tier produces a document.
    """
    found: asyncio.Future[dict[str, Any]] = asyncio.get_running_loop().create_future()

    async def _on_response(response: Response) -> None:
        if found.done() or not is_spec_url(response.url):
            return
        try:
            text = await response.text()
        except (PlaywrightError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable response %s: %s", response.url, exc)
            return
        try:
            document = parse_spec_text(text)
        except SpecParseError as exc:
            logger.debug("Skipping %s: %s", response.url, exc)
            return
        if not found.done():
            logger.debug("Captured specification from %s", response.url)
            found.set_result(document)

    page.on("response", _on_response)
    try:
        try:
            await page.goto(url, wait_until="networkidle")
        except PlaywrightError as exc:
            raise UpstreamError(str(exc)) from exc

        document = await _wait_for_network(found, timeout)
        if document is None:
            logger.debug("No specification on the network for %s, reading page state", url)
            document = await _read_page_state(page)
    finally:
        page.remove_listener("response", _on_response)
        if not found.done():
            found.cancel()

    if document is None:
        raise DiscoveryError()
    return document


async def _wait_for_network(
    found: asyncio.Future[dict[str, Any]], timeout: float
) -> Optional[dict[str, Any]]:
    """Wait up to *timeout* seconds for the observer; ``None`` on timeout."""
    try:
        return await asyncio.wait_for(found, timeout)
    except asyncio.TimeoutError:
        return None


async def _read_page_state(page: Page) -> Optional[dict[str, Any]]:
    """Return the document held by Swagger UI in the page, if any."""
    try:
        state = await page.evaluate(SWAGGER_UI_SPEC_SCRIPT)
    except PlaywrightError as exc:
        raise UpstreamError(str(exc)) from exc
    if isinstance(state, dict):
        return state
    return None
