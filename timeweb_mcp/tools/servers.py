"""Tools: cloud servers, their OS images, presets, logs and statistics."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    action_operation,
    collection_operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import (
    average_percent,
    bullet,
    code_block,
    format_bytes,
    format_date,
    format_megabytes,
    section,
    value_or,
)
from timeweb_mcp.shared.schemas import FormattedArgs, Location, id_field, location_field

ServerAction = Literal[
    "start", "stop", "reboot", "shutdown", "reset_password", "reinstall", "clone", "hard_shutdown",
]


class ServerDescriptor(TypedDict, total=False):
    id: int
    name: str
    status: str
    location: str
    os: dict
    configurator: dict
    cpu: int
    ram: int
    main_ipv4: str
    bandwidth: int
    created_at: str


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

class ServerIdArgs(FormattedArgs):
    server_id: int = id_field("Server ID")


class CreateServerArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Server name")
    os_id: int = id_field("Operating system ID")
    preset_id: int | None = Field(None, gt=0, description="Server preset ID (use instead of custom config)")
    cpu: int | None = Field(None, gt=0, description="Number of CPU cores (if not using preset)")
    ram: int | None = Field(None, gt=0, description="RAM in MB (if not using preset)")
    disk: int | None = Field(None, gt=0, description="Disk size in MB (if not using preset)")
    bandwidth: int | None = Field(None, gt=0, description="Bandwidth in Mbps")
    location: Location | None = location_field("Server location")
    ssh_keys_ids: list[int] | None = Field(None, description="SSH key IDs to add")
    is_ddos_guard: bool | None = Field(None, description="Enable DDoS protection")


class ServerActionArgs(ServerIdArgs):
    action: ServerAction = Field(..., description="Action to perform on the server")


class ServerLogsArgs(ServerIdArgs):
    limit: int | None = Field(
        None, ge=1, le=1000, description="Maximum number of log lines to return (default: 100, max: 1000)"
    )
    order: Literal["asc", "desc"] | None = Field(
        None, description="Sort order (default: desc - newest first)"
    )


class ServerStatisticsArgs(ServerIdArgs):
    date_from: str | None = Field(
        None, description="Start date for statistics in ISO format (e.g., '2024-01-01T00:00:00Z')"
    )
    date_to: str | None = Field(None, description="End date for statistics in ISO format")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_server(server: ServerDescriptor) -> str:
    configurator = server.get("configurator") or {}
    os_info = server.get("os") or {}
    bandwidth = server.get("bandwidth")
    return section(f"{value_or(server.get('name'))} (ID: {value_or(server.get('id'))})", [
        bullet("Status", value_or(server.get("status"))),
        bullet("Location", value_or(server.get("location"))),
        bullet("OS", f"{value_or(os_info.get('name'))} {os_info.get('version') or ''}".rstrip()),
        bullet("CPU", f"{value_or(configurator.get('cpu') or server.get('cpu'))} cores"),
        bullet("RAM", format_megabytes(configurator.get("ram") or server.get("ram"))),
        bullet("Disk", format_megabytes(configurator.get("disk"))),
        bullet("Main IP", value_or(server.get("main_ipv4"))),
        bullet("Bandwidth", f"{format_bytes(bandwidth)}/s" if bandwidth else "N/A"),
        bullet("Created", format_date(server.get("created_at"))),
    ])


def format_os(image: dict) -> str:
    return f"- **{value_or(image.get('name'))}** (ID: {value_or(image.get('id'))}) - {image.get('version') or 'latest'}"


def format_preset(preset: dict) -> str:
    return section(f"{preset.get('description') or 'Preset'} (ID: {value_or(preset.get('id'))})", [
        bullet("CPU", f"{value_or(preset.get('cpu'))} cores"),
        bullet("RAM", format_megabytes(preset.get("ram"))),
        bullet("Disk", f"{format_megabytes(preset.get('disk'))} ({value_or(preset.get('disk_type'))})"),
        bullet("Bandwidth", f"{value_or(preset.get('bandwidth'))} Mbps"),
        bullet("Price", f"{value_or(preset.get('price'))} {preset.get('currency') or ''}/month"),
        bullet("Location", value_or(preset.get("location"))),
    ])


def logs_query(args: ServerLogsArgs) -> dict:
    return {"limit": args.limit or 100, "order": args.order or "desc"}


def logs_structured(payload, args: ServerLogsArgs) -> dict:
    logs = payload.get("server_logs") or []
    return {"logs": logs, "server_id": args.server_id, "count": len(logs)}


def render_logs(payload, args: ServerLogsArgs) -> str:
    logs = payload.get("server_logs") or []
    if not logs:
        return f"No logs found for server {args.server_id}."
    lines = "\n".join(f"[{value_or(log.get('logged_at'))}] {log.get('message', '')}" for log in logs)
    return (
        f"# Server Logs (Server {args.server_id})\n\n"
        f"**Total entries:** {len(logs)}\n\n"
        f"{code_block(lines)}"
    )


def statistics_query(args: ServerStatisticsArgs) -> dict | None:
    params = {}
    if args.date_from:
        params["date_from"] = args.date_from
    if args.date_to:
        params["date_to"] = args.date_to
    return params or None


def statistics_structured(payload, args: ServerStatisticsArgs) -> dict:
    return {"statistics": payload.get("server_statistics"), "server_id": args.server_id}


def usage(samples: list | None) -> str:
    """Average percent plus the latest used/total sample (values in MB)."""
    text = average_percent(samples)
    if samples:
        latest = samples[-1]
        if latest.get("used") is not None and latest.get("total") is not None:
            text += f" ({format_megabytes(latest['used'])} / {format_megabytes(latest['total'])})"
    return text


def render_statistics(payload, args: ServerStatisticsArgs) -> str:
    stats = payload.get("server_statistics") or {}
    summary = section("Summary", [
        bullet("Average CPU Usage", average_percent(stats.get("cpu"))),
        bullet("Average RAM Usage", usage(stats.get("ram"))),
        bullet("Average Disk Usage", usage(stats.get("disk"))),
    ])
    points = section("Data Points", [
        bullet("CPU samples", len(stats.get("cpu") or [])),
        bullet("RAM samples", len(stats.get("ram") or [])),
        bullet("Disk samples", len(stats.get("disk") or [])),
        bullet("Network RX samples", len(stats.get("network_rx") or [])),
        bullet("Network TX samples", len(stats.get("network_tx") or [])),
    ])
    return f"# Server Statistics (Server {args.server_id})\n\n{summary}\n\n{points}"


def create_server_body(args: CreateServerArgs) -> dict:
    """Preset wins over a custom configurator; cpu/ram/disk are only sent without one."""
    body = {"name": args.name, "os_id": args.os_id}
    if args.preset_id:
        body["preset_id"] = args.preset_id
    else:
        configurator = {
            field: getattr(args, field)
            for field in ("cpu", "ram", "disk")
            if getattr(args, field) is not None
        }
        if configurator:
            body["configurator"] = configurator
    for field in ("bandwidth", "location", "ssh_keys_ids", "is_ddos_guard"):
        value = getattr(args, field)
        if value is not None:
            body[field] = value
    return body


OPERATIONS = [
    list_operation(
        "timeweb_list_servers",
        "List all cloud servers in the account with pagination support",
        "/api/v1/servers",
        key="servers",
        title="Cloud Servers",
        render_item=format_server,
        empty="No servers found.",
    ),
    get_operation(
        "timeweb_get_server",
        "Get detailed information about a specific server",
        "/api/v1/servers/{server_id}",
        key="server",
        render_item=format_server,
        args=ServerIdArgs,
    ),
    create_operation(
        "timeweb_create_server",
        "Create a new cloud server with specified configuration",
        "/api/v1/servers",
        key="server",
        heading="Server Created Successfully",
        render_item=format_server,
        args=CreateServerArgs,
        body=create_server_body,
    ),
    action_operation(
        "timeweb_server_action",
        "Perform an action on a server: start, stop, reboot, shutdown, reset_password, reinstall, clone, hard_shutdown",
        "/api/v1/servers/{server_id}/{action}",
        args=ServerActionArgs,
        message="Action **{action}** initiated successfully on server {server_id}.",
        result={"action": "action", "server_id": "server_id"},
    ),
    delete_operation(
        "timeweb_delete_server",
        "Delete a cloud server permanently",
        "/api/v1/servers/{server_id}",
        args=ServerIdArgs,
        message="Server {server_id} has been deleted successfully.",
        result={"deleted_server_id": "server_id"},
    ),
    collection_operation(
        "timeweb_list_os",
        "List available operating system images for server creation",
        "/api/v1/os/servers",
        key="os",
        title="Available Operating Systems",
        render_item=format_os,
        empty="No OS images found.",
        separator="\n",
    ),
    collection_operation(
        "timeweb_list_server_presets",
        "List available server configuration presets",
        "/api/v1/presets/servers",
        key="server_presets",
        title="Server Presets",
        render_item=format_preset,
        empty="No presets found.",
    ),
    Operation(
        "timeweb_get_server_logs",
        "Get logs from a cloud server",
        ServerLogsArgs,
        "GET",
        "/api/v1/servers/{server_id}/logs",
        render=render_logs,
        structured=logs_structured,
        query=logs_query,
    ),
    Operation(
        "timeweb_get_server_statistics",
        "Get resource usage statistics for a cloud server (CPU, RAM, Disk, Network)",
        ServerStatisticsArgs,
        "GET",
        "/api/v1/servers/{server_id}/statistics",
        render=render_statistics,
        structured=statistics_structured,
        query=statistics_query,
    ),
]
