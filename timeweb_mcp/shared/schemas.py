"""Shared tool argument fragments and argument validation."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from timeweb_mcp.constants import MAX_LIMIT
from timeweb_mcp.shared.errors import InvalidArgument


class ResponseFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"


Location = Literal["ru-1", "ru-2", "ru-3", "pl-1", "kz-1", "nl-1"]

# Fields that shape the response rather than the request body
CONTROL_FIELDS = frozenset({"format", "limit", "offset"})


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def id_field(description: str):
    """Required positive integer identifier."""
    return Field(..., gt=0, description=description)


def string_id_field(description: str):
    """Required non-empty string identifier."""
    return Field(..., min_length=1, description=description)


def location_field(description: str = "Datacenter location (ru-1, ru-2, ru-3, pl-1, kz-1, nl-1)"):
    return Field(None, description=description)


# ---------------------------------------------------------------------------
# Base argument models
# ---------------------------------------------------------------------------

class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FormattedArgs(ToolArgs):
    format: ResponseFormat | None = Field(
        None,
        description="Output format: 'markdown' for human-readable text (default) or 'json' for structured data",
    )


class PaginatedArgs(FormattedArgs):
    limit: int | None = Field(
        None, ge=1, le=MAX_LIMIT, description=f"Maximum results to return (1-{MAX_LIMIT}, default 50)"
    )
    offset: int | None = Field(None, ge=0, description="Number of results to skip (default 0)")


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def validate_tool_args(schema: type[ToolArgs], arguments: dict | None) -> ToolArgs:
    """Validate raw tool arguments. Raises InvalidArgument naming the first bad field."""
    try:
        return schema.model_validate(arguments or {})
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "arguments"
        raise InvalidArgument(field, first.get("msg", "invalid value")) from exc


def supplied(args: ToolArgs, exclude: set | frozenset = frozenset()) -> dict:
    """Request-body projection: only fields the caller actually supplied a value for."""
    return args.model_dump(mode="json", exclude_none=True, exclude=set(CONTROL_FIELDS | exclude))
