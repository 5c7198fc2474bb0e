"""
Readable messages for errors coming back from Supabase.

PostgREST and storage errors arrive as strings, dicts, APIError instances or
exceptions wrapping a dict. Showing str() of those in the admin gives "{}" or
an empty toast, so everything is normalized into one line of text here.
"""

from collections.abc import Mapping
import json
from typing import Any

from postgrest.exceptions import APIError

UNKNOWN_ERROR = "Unknown error"

# Keys that hold the main message, in order of preference
_MESSAGE_KEYS = ("message", "error_description", "error", "msg")


def describe_error(error: Any) -> str:
    """
    Describe an error payload as a single human-readable line.

    Args:
        error: String, mapping, APIError, exception or anything else

    Returns:
        Non-empty description

    Examples:
        "timeout" → "timeout"
        {"message": "duplicate key", "code": "23505"} → "duplicate key (code 23505)"
        {"foo": 1} → '{"foo": 1}'
        {} → "Unknown error"
    """
    if error is None:
        return UNKNOWN_ERROR

    if isinstance(error, str):
        return error.strip() or UNKNOWN_ERROR

    if isinstance(error, APIError):
        payload = {
            "message": error.message,
            "code": error.code,
            "details": error.details,
            "hint": error.hint,
        }
        return _describe_mapping(payload)

    if isinstance(error, Mapping):
        return _describe_mapping(error)

    if isinstance(error, BaseException):
        # storage errors keep the response dict in args[0]
        if error.args and isinstance(error.args[0], Mapping):
            return _describe_mapping(error.args[0])
        text = str(error).strip()
        if text and text not in ("{}", "[]"):
            return text
        return type(error).__name__

    return _to_json(error)


def _describe_mapping(payload: Mapping) -> str:
    """Format message, code, details and hint from a dict-shaped error."""
    message = None
    for key in _MESSAGE_KEYS:
        value = payload.get(key)
        if value:
            message = value if isinstance(value, str) else describe_error(value)
            break

    if message is None:
        remaining = {k: v for k, v in payload.items() if v not in (None, "")}
        if not remaining:
            return UNKNOWN_ERROR
        return _to_json(remaining)

    code = payload.get("code") or payload.get("statusCode")
    if code:
        message = f"{message} (code {code})"

    details = payload.get("details")
    if details:
        details_text = details if isinstance(details, str) else _to_json(details)
        message = f"{message}: {details_text}"

    hint = payload.get("hint")
    if hint:
        message = f"{message}. Hint: {hint}"

    return message


def _to_json(value: Any) -> str:
    try:
        return json.dumps(value, default=str, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)
