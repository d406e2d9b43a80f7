from __future__ import annotations

import json
from typing import Any

DEFAULT_STATUS_MESSAGES = {
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    500: "Internal Server Error",
}
GENERIC_ERROR_MESSAGE = "An error occurred"


def default_status_message(status: int) -> str:
    return DEFAULT_STATUS_MESSAGES.get(status, GENERIC_ERROR_MESSAGE)


def server_message(body: Any, status: int) -> str:
    """Prefer a message supplied by the server over the per-status default."""
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return default_status_message(status)


def error_details(body: Any) -> str | None:
    if body is None:
        return None
    if isinstance(body, (dict, list)):
        return json.dumps(body, ensure_ascii=False)
    text = str(body)
    return text[:1000] if text else None


def parse_api_error_detail(details: str | None) -> dict | None:
    if not details:
        return None
    try:
        data = json.loads(details)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
