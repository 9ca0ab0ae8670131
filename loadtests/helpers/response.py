"""Response error extraction for load test observability.

Parses Carts API error envelopes into human-readable messages:

    {"status": 400, "error": "Bad Request", "message": "Validation failed",
     "validationErrors": {"quantity": "must be at most 1000"}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message from an API error response.

    Falls back to the raw body for anything that is not the JSON envelope.
    """
    try:
        body = response.json()
    except Exception:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict) or "message" not in body:
        return str(body)[:300]

    detail = str(body["message"])
    field_errors = body.get("validationErrors") or {}
    if field_errors:
        detail += " (" + " | ".join(f"{k}: {v}" for k, v in field_errors.items()) + ")"
    return detail
