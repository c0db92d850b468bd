"""Browser automation -- the Chromium engine and spec discovery.

Sub-modules:

* :mod:`~swagger_explorer.browser.engine` -- :class:`BrowserEngine`, the
  process-wide Playwright/Chromium owner that lends one page per request.
* :mod:`~swagger_explorer.browser.discovery` -- :func:`discover`, the
  network-then-page-state search for the specification document.
"""

from swagger_explorer.browser.discovery import DEFAULT_DISCOVERY_TIMEOUT, discover
from swagger_explorer.browser.engine import BrowserEngine

__all__ = ["BrowserEngine", "discover", "DEFAULT_DISCOVERY_TIMEOUT"]
