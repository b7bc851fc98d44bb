"""Declarative resource operations and the engine that executes them.

Every tool is an ``Operation``: an argument model, one HTTP method and path
template, optional query/body projections, and two response projections
(structured JSON and rendered markdown). ``invoke`` runs one operation:
validate, build the request, make exactly one call, project the response.
Failures of any kind come back as a single ``Error: ...`` string.
"""

from __future__ import annotations

import copy
import inspect
import json
import logging
from dataclasses import dataclass
from string import Formatter
from typing import Any, Callable, Iterable, Iterator
from urllib.parse import quote

from timeweb_mcp.constants import DEFAULT_LIMIT, MAX_LIMIT
from timeweb_mcp.shared.errors import classify_error
from timeweb_mcp.shared.formatting import render_list, render_page, truncate
from timeweb_mcp.shared.schemas import (
    FormattedArgs,
    PaginatedArgs,
    ResponseFormat,
    ToolArgs,
    supplied,
    validate_tool_args,
)

logger = logging.getLogger(__name__)

Projection = Callable[[Any, Any], Any]


def echo(payload, args):
    return payload


def unwrap(key: str) -> Projection:
    """Projection returning the resource under one response key."""

    def project(payload, args):
        return payload.get(key)

    return project


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    args: type[ToolArgs]
    method: str
    path: str
    render: Callable[[Any, Any], str]
    structured: Projection = echo
    query: Callable[[Any], dict | None] | None = None
    body: Callable[[Any], dict | None] | None = None

    @property
    def read_only(self) -> bool:
        return self.method == "GET"


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------

def path_fields(template: str) -> set[str]:
    return {name for _, name, _, _ in Formatter().parse(template) if name}


def fill_path(template: str, args: ToolArgs) -> str:
    values = {name: quote(str(getattr(args, name)), safe="") for name in path_fields(template)}
    return template.format(**values)


def page_window(args) -> tuple[int, int]:
    limit = min(getattr(args, "limit", None) or DEFAULT_LIMIT, MAX_LIMIT)
    offset = getattr(args, "offset", None) or 0
    return limit, offset


def page_query(args) -> dict:
    limit, offset = page_window(args)
    return {"limit": limit, "offset": offset}


def page_total(payload: dict, items: list) -> int:
    meta = payload.get("meta") or {}
    return meta.get("total") or len(items)


def output_format(args) -> ResponseFormat:
    return getattr(args, "format", None) or ResponseFormat.MARKDOWN


def to_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def body_from_args(path: str, exclude: Iterable[str] = ()) -> Callable[[Any], dict]:
    """Body of every supplied argument except path parameters."""
    skip = frozenset(path_fields(path)) | frozenset(exclude)

    def build(args):
        return supplied(args, skip)

    return build


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

async def invoke(operation: Operation, client, arguments: dict | None) -> str:
    """Run one tool invocation end to end. Never raises."""
    try:
        args = validate_tool_args(operation.args, arguments)
        path = fill_path(operation.path, args)
        params = operation.query(args) if operation.query else None
        body = operation.body(args) if operation.body else None

        logger.info(json.dumps({
            "event": "tool_call",
            "tool": operation.name,
            "method": operation.method,
            "path": path,
        }))
        payload = await client.request(operation.method, path, params=params, json=body)

        if output_format(args) is ResponseFormat.JSON:
            return to_json(operation.structured(payload, args))
        return truncate(operation.render(payload, args))
    except Exception as e:
        error = classify_error(e)
        logger.warning(json.dumps({
            "event": "tool_error",
            "tool": operation.name,
            "category": error.category,
        }))
        return error.message


# ---------------------------------------------------------------------------
# Operation builders
# ---------------------------------------------------------------------------

def list_operation(
    name: str,
    description: str,
    path: str,
    *,
    key: str,
    title: str,
    render_item: Callable[[dict], str],
    empty: str,
    args: type[PaginatedArgs] = PaginatedArgs,
    json_key: str | None = None,
    context: tuple[str, ...] = (),
    query: Callable[[Any], dict] | None = None,
    separator: str = "\n\n",
) -> Operation:
    """Paginated collection read. ``title`` and ``empty`` may reference argument names."""

    def structured(payload, args):
        items = payload.get(key) or []
        limit, offset = page_window(args)
        result = {
            json_key or key: items,
            "total": page_total(payload, items),
            "limit": limit,
            "offset": offset,
        }
        result.update({field: getattr(args, field) for field in context})
        return result

    def render(payload, args):
        items = payload.get(key) or []
        limit, offset = page_window(args)
        values = args.model_dump()
        return render_page(
            title.format(**values),
            items,
            render_item,
            page_total(payload, items),
            limit,
            offset,
            empty.format(**values),
            separator,
        )

    return Operation(name, description, args, "GET", path, render, structured, query=query or page_query)


def collection_operation(
    name: str,
    description: str,
    path: str,
    *,
    key: str,
    title: str,
    render_item: Callable[[dict], str],
    empty: str,
    args: type[FormattedArgs] = FormattedArgs,
    json_key: str | None = None,
    context: tuple[str, ...] = (),
    summary: Callable[[list], str] | None = None,
    separator: str = "\n\n",
) -> Operation:
    """Unpaginated collection read. Structured output is the bare list unless wrapped."""

    def structured(payload, args):
        items = payload.get(key) or []
        if json_key is None:
            return items
        result = {json_key: items}
        result.update({field: getattr(args, field) for field in context})
        return result

    def render(payload, args):
        items = payload.get(key) or []
        values = args.model_dump()
        text = render_list(title.format(**values), items, render_item, empty.format(**values), separator)
        if items and summary:
            heading, _, rest = text.partition("\n\n")
            text = f"{heading}\n\n{summary(items)}\n\n{rest}"
        return text

    return Operation(name, description, args, "GET", path, render, structured)


def get_operation(
    name: str,
    description: str,
    path: str,
    *,
    key: str,
    render_item: Callable[[dict], str],
    args: type[FormattedArgs],
) -> Operation:

    def render(payload, args):
        return render_item(payload.get(key) or {})

    return Operation(name, description, args, "GET", path, render, unwrap(key))


def create_operation(
    name: str,
    description: str,
    path: str,
    *,
    key: str,
    heading: str,
    render_item: Callable[[dict], str],
    args: type[FormattedArgs],
    body: Callable[[Any], dict] | None = None,
    method: str = "POST",
    footer: str | None = None,
) -> Operation:
    """Create (or, with ``method="PATCH"``, update) a resource and show the result."""

    def render(payload, args):
        text = f"# {heading}\n\n{render_item(payload.get(key) or {})}"
        if footer:
            text += f"\n\n{footer}"
        return text

    return Operation(
        name, description, args, method, path, render, unwrap(key),
        body=body or body_from_args(path),
    )


def update_operation(name: str, description: str, path: str, **kwargs) -> Operation:
    return create_operation(name, description, path, method="PATCH", **kwargs)


def acknowledged_operation(
    name: str,
    description: str,
    method: str,
    path: str,
    *,
    args: type[FormattedArgs],
    message: str,
    result: dict[str, str],
    body: Callable[[Any], dict | None] | None = None,
    extra: dict | None = None,
) -> Operation:
    """Operations whose response carries nothing worth showing.

    ``result`` maps output keys to argument names and ``extra`` adds fixed
    entries; ``message`` may reference argument names.
    """

    def structured(payload, args):
        ack = {"success": True, **{out: getattr(args, field) for out, field in result.items()}}
        ack.update(extra or {})
        return ack

    def render(payload, args):
        return message.format(**args.model_dump())

    return Operation(name, description, args, method, path, render, structured, body=body)


def delete_operation(name: str, description: str, path: str, **kwargs) -> Operation:
    return acknowledged_operation(name, description, "DELETE", path, **kwargs)


def action_operation(name: str, description: str, path: str, **kwargs) -> Operation:
    return acknowledged_operation(name, description, "POST", path, **kwargs)


# ---------------------------------------------------------------------------
# Registry and MCP binding
# ---------------------------------------------------------------------------

class ToolRegistry:
    """Operations indexed by unique tool name."""

    def __init__(self, operations: Iterable[Operation] = ()):
        self._operations: dict[str, Operation] = {}
        self.extend(operations)

    def add(self, operation: Operation) -> None:
        if operation.name in self._operations:
            raise ValueError(f"Duplicate tool name: {operation.name}")
        self._operations[operation.name] = operation

    def extend(self, operations: Iterable[Operation]) -> None:
        for operation in operations:
            self.add(operation)

    def get(self, name: str) -> Operation:
        return self._operations[name]

    def names(self) -> list[str]:
        return list(self._operations)

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    async def dispatch(self, client, name: str, arguments: dict | None) -> str:
        """Invoke a tool by name. Raises KeyError for an unknown name."""
        return await invoke(self.get(name), client, arguments)


def tool_signature(schema: type[ToolArgs]) -> inspect.Signature:
    """Keyword-only signature mirroring the argument model's fields."""
    parameters = [
        inspect.Parameter(
            field_name,
            inspect.Parameter.KEYWORD_ONLY,
            default=copy.deepcopy(field),
            annotation=field.annotation,
        )
        for field_name, field in schema.model_fields.items()
    ]
    return inspect.Signature(parameters, return_annotation=str)


def bind_operation(operation: Operation, client) -> Callable[..., Any]:
    """Coroutine function FastMCP can register; its schema comes from the argument model."""

    async def handler(**arguments) -> str:
        return await invoke(operation, client, arguments)

    handler.__name__ = operation.name
    handler.__qualname__ = operation.name
    handler.__doc__ = operation.description
    handler.__signature__ = tool_signature(operation.args)
    return handler


def register_operations(mcp, registry: ToolRegistry, client) -> None:
    for operation in registry:
        mcp.add_tool(bind_operation(operation, client), name=operation.name, description=operation.description)
