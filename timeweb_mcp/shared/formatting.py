"""Pure value formatters and markdown building blocks for rendered output."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Callable, Iterable

from babel.dates import format_datetime
from babel.numbers import format_currency as babel_format_currency

from timeweb_mcp.constants import CHARACTER_LIMIT, DEFAULT_CURRENCY, DEFAULT_LOCALE

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")
DATE_PATTERN = "d MMMM y, HH:mm"

MORE_RESULTS_HINT = "*Use offset parameter to see more results.*"


# ---------------------------------------------------------------------------
# Scalar values
# ---------------------------------------------------------------------------

def format_bytes(size: float | None) -> str:
    """Human-readable size with binary units, e.g. ``1536 -> "1.5 KB"``."""
    if size is None:
        return "N/A"
    if size == 0:
        return "0 B"
    value = float(size)
    unit = 0
    while abs(value) >= 1024 and unit < len(BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[unit]}"


def format_megabytes(size: float | None) -> str:
    """Sizes the API reports in megabytes (disk, RAM)."""
    if size is None:
        return "N/A"
    return format_bytes(size * 1024 * 1024)


def format_currency(
    amount: float | None, currency: str = DEFAULT_CURRENCY, locale: str = DEFAULT_LOCALE
) -> str:
    if amount is None:
        return "N/A"
    return babel_format_currency(amount, currency or DEFAULT_CURRENCY, locale=locale)


def format_date(value: str | None, locale: str = DEFAULT_LOCALE) -> str:
    """Format an ISO timestamp. Unparsable input is returned unchanged."""
    if not value:
        return "N/A"
    try:
        moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return format_datetime(moment, DATE_PATTERN, locale=locale)


def value_or(value, placeholder: str = "N/A"):
    """Return value unless it is absent (None or empty string)."""
    if value is None or value == "":
        return placeholder
    return value


def yes_no(value) -> str:
    return "Yes" if value else "No"


def average_percent(samples: Iterable[dict] | None) -> str:
    """Mean of the ``percent`` field of statistics samples, to one decimal."""
    values = [s.get("percent") for s in samples or [] if s.get("percent") is not None]
    if not values:
        return "N/A"
    return f"{sum(values) / len(values):.1f}%"


# ---------------------------------------------------------------------------
# Markdown blocks
# ---------------------------------------------------------------------------

def bullet(label: str, value) -> str:
    return f"- **{label}:** {value}"


def section(title: str, lines: Iterable[str | None], level: int = 2) -> str:
    """Heading followed by the non-empty lines."""
    body = [line for line in lines if line]
    return "\n".join([f"{'#' * level} {title}", *body])


def code_block(text: str, language: str = "") -> str:
    return f"```{language}\n{text}\n```"


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def pagination_summary(total: int, limit: int, offset: int) -> str:
    """Position line for a page; appends a hint when more items follow."""
    page = offset // limit + 1
    pages = math.ceil(total / limit)
    end = min(offset + limit, total)
    summary = f"Showing {offset + 1}-{end} of {total} items (Page {page}/{pages})"
    if offset + limit < total:
        summary += f"\n{MORE_RESULTS_HINT}"
    return summary


def render_page(
    title: str,
    items: list,
    render_item: Callable[[dict], str],
    total: int,
    limit: int,
    offset: int,
    empty: str,
    separator: str = "\n\n",
) -> str:
    if not items:
        return empty
    body = separator.join(render_item(item) for item in items)
    return f"# {title}\n\n{pagination_summary(total, limit, offset)}\n\n{body}"


def render_list(
    title: str,
    items: list,
    render_item: Callable[[dict], str],
    empty: str,
    separator: str = "\n\n",
) -> str:
    """Unpaginated collection: heading and items, or the empty sentence."""
    if not items:
        return empty
    return f"# {title}\n\n" + separator.join(render_item(item) for item in items)


def truncate(text: str, limit: int = CHARACTER_LIMIT) -> str:
    if len(text) <= limit:
        return text
    omitted = len(text) - limit
    return (
        f"{text[:limit]}\n\n*Response truncated: {omitted} characters omitted. "
        "Use limit and offset to request a smaller page.*"
    )
