"""Error taxonomy and translation of failures into user-facing messages."""

from __future__ import annotations

import httpx


class TimewebError(Exception):
    def __init__(self, category: str, message: str):
        self.category = category
        self.message = message
        super().__init__(f"[{category}] {message}")


class InvalidArgument(TimewebError):
    """An argument failed schema validation. Raised before any network call."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__("invalid_argument", f"Error: Invalid argument '{field}': {reason}")


class ConfigError(TimewebError):
    def __init__(self, message: str):
        super().__init__("config", message)


# ---------------------------------------------------------------------------
# HTTP status table
# ---------------------------------------------------------------------------

# status -> (category, prefix, fallback used when the provider sends no message)
STATUS_MESSAGES = {
    400: ("bad_request", "Bad request.", "Please check your parameters."),
    401: ("unauthorized", "Authentication failed.", None),
    403: ("permission_denied", "Permission denied.", "You don't have access to this resource."),
    404: ("not_found", "Resource not found.", "Please check the ID is correct."),
    409: ("conflict", "Conflict.", "The request conflicts with the current state."),
    423: ("locked", "Resource locked.", "The resource is locked from this operation."),
    429: ("rate_limited", "Rate limit exceeded.", None),
    500: ("server_error", "Internal server error.", "Please try again later or contact support."),
}

# Statuses whose message never includes provider text
FIXED_MESSAGES = {
    401: "Error: Authentication failed. Please check your API token.",
    429: "Error: Rate limit exceeded. Please wait before making more requests.",
}

TIMEOUT_MESSAGE = "Error: Request timed out. Please try again."
UNREACHABLE_MESSAGE = "Error: Could not connect to Timeweb Cloud API. Check your network connection."


def provider_message(response: httpx.Response) -> str:
    """Extract the human-readable message from an error response body, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    message = body.get("message")
    if isinstance(message, list):
        return ", ".join(str(part) for part in message)
    return str(message) if message else ""


def classify_status(status: int, message: str) -> TimewebError:
    if status in FIXED_MESSAGES:
        return TimewebError(STATUS_MESSAGES[status][0], FIXED_MESSAGES[status])
    if status in STATUS_MESSAGES:
        category, prefix, fallback = STATUS_MESSAGES[status]
        return TimewebError(category, f"Error: {prefix} {message or fallback}")
    category = "server_error" if status >= 500 else "http_error"
    return TimewebError(
        category, f"Error: API request failed with status {status}. {message}".rstrip()
    )


def classify_error(exc: Exception) -> TimewebError:
    """Map any exception to a TimewebError with a category and final message."""
    if isinstance(exc, TimewebError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(exc.response.status_code, provider_message(exc.response))
    # ConnectTimeout is both a timeout and a network error; timeout wins
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return TimewebError("timeout", TIMEOUT_MESSAGE)
    if isinstance(exc, (httpx.NetworkError, ConnectionError)):
        return TimewebError("network_unreachable", UNREACHABLE_MESSAGE)
    return TimewebError("unexpected", f"Error: Unexpected error occurred: {exc}")


def error_message(exc: Exception) -> str:
    return classify_error(exc).message
