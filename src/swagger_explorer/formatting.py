"""Response envelopes for the ``format`` field of API requests.

Clients choose how results are wrapped:

* ``minimal`` -- null and empty-string values are stripped at every depth
  and the result is wrapped as ``{"status": "success", "data": ...}``.
* ``detailed`` -- the result is returned untouched inside an envelope that
  also carries a UTC timestamp and format metadata.
* anything else, including no format at all -- the result is returned as-is.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

ENVELOPE_VERSION = "1.0"

FORMAT_MINIMAL = "minimal"
FORMAT_DETAILED = "detailed"


def minimize(data: Any) -> Any:
    """Recursively drop mapping entries whose value is ``None`` or ``""``.

    Lists are processed element-wise; their elements are never removed,
    only minimised. Other values are returned unchanged. Applying the
    function twice gives the same result as applying it once.
    """
    if isinstance(data, list):
        return [minimize(item) for item in data]
    if isinstance(data, dict):
        return {
            key: minimize(value)
            for key, value in data.items()
            if value is not None and value != ""
        }
    return data


def format_response(data: Any, format_name: Optional[str] = None) -> Any:
    """Wrap *data* according to *format_name* (case-insensitive).

    Args:
        data: A JSON-ready result (dict or list).
        format_name: ``"minimal"``, ``"detailed"``, or anything else for
            pass-through.

    Returns:
        The envelope, or *data* itself for unrecognised formats.
    """
    name = format_name.lower() if isinstance(format_name, str) else None

    if name == FORMAT_MINIMAL:
        return {"status": "success", "data": minimize(data)}

    if name == FORMAT_DETAILED:
        return {
            "status": "success",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data,
            "metadata": {"version": ENVELOPE_VERSION, "format": FORMAT_DETAILED},
        }

    return data
