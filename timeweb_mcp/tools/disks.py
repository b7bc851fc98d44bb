"""Tools: disks attached to a cloud server."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    collection_operation,
    create_operation,
    delete_operation,
    get_operation,
    update_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_megabytes, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, id_field

MIN_DISK_SIZE = 5120


class DiskDescriptor(TypedDict, total=False):
    id: int
    size: int
    used: int
    type: str
    is_mounted: bool
    is_system: bool
    system_name: str
    status: str


class ServerDisksArgs(FormattedArgs):
    server_id: int = id_field("Server ID")


class DiskIdArgs(ServerDisksArgs):
    disk_id: int = id_field("Disk ID")


class CreateDiskArgs(ServerDisksArgs):
    size: int = Field(..., ge=MIN_DISK_SIZE, description="Disk size in MB (minimum 5120 MB = 5 GB)")
    type: Literal["nvme", "ssd", "hdd"] | None = Field(None, description="Disk type (default: nvme)")


class UpdateDiskArgs(DiskIdArgs):
    size: int = Field(..., ge=MIN_DISK_SIZE, description="New disk size in MB (can only increase)")


def format_disk(disk: DiskDescriptor) -> str:
    size = disk.get("size") or 0
    used = disk.get("used") or 0
    percent = round(used / size * 100) if size > 0 else 0
    return section(f"Disk {value_or(disk.get('id'))} ({value_or(disk.get('system_name'))})", [
        bullet("Size", format_megabytes(size)),
        bullet("Used", f"{format_megabytes(used)} ({percent}%)"),
        bullet("Type", str(value_or(disk.get("type"))).upper()),
        bullet("Status", value_or(disk.get("status"))),
        bullet("System Disk", yes_no(disk.get("is_system"))),
        bullet("Mounted", yes_no(disk.get("is_mounted"))),
    ])


def disks_total(disks: list) -> str:
    total_size = sum(disk.get("size") or 0 for disk in disks)
    total_used = sum(disk.get("used") or 0 for disk in disks)
    return (
        f"**Total:** {len(disks)} disks | "
        f"{format_megabytes(total_used)} / {format_megabytes(total_size)} used"
    )


OPERATIONS = [
    collection_operation(
        "timeweb_list_server_disks",
        "List all disks attached to a server",
        "/api/v1/servers/{server_id}/disks",
        key="server_disks",
        title="Server Disks (Server {server_id})",
        render_item=format_disk,
        empty="No disks found for server {server_id}.",
        args=ServerDisksArgs,
        json_key="disks",
        context=("server_id",),
        summary=disks_total,
    ),
    get_operation(
        "timeweb_get_server_disk",
        "Get detailed information about a specific server disk",
        "/api/v1/servers/{server_id}/disks/{disk_id}",
        key="server_disk",
        render_item=format_disk,
        args=DiskIdArgs,
    ),
    create_operation(
        "timeweb_create_server_disk",
        "Add a new disk to a server",
        "/api/v1/servers/{server_id}/disks",
        key="server_disk",
        heading="Disk Created Successfully",
        render_item=format_disk,
        args=CreateDiskArgs,
    ),
    update_operation(
        "timeweb_update_server_disk",
        "Resize a server disk (size can only be increased)",
        "/api/v1/servers/{server_id}/disks/{disk_id}",
        key="server_disk",
        heading="Disk Updated Successfully",
        render_item=format_disk,
        args=UpdateDiskArgs,
    ),
    delete_operation(
        "timeweb_delete_server_disk",
        "Delete a disk from a server (system disks cannot be deleted)",
        "/api/v1/servers/{server_id}/disks/{disk_id}",
        args=DiskIdArgs,
        message="Disk {disk_id} has been deleted from server {server_id} successfully.",
        result={"deleted_disk_id": "disk_id", "server_id": "server_id"},
    ),
]
