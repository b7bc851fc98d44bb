"""Tools: floating IP addresses."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    action_operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_date, section, value_or
from timeweb_mcp.shared.schemas import FormattedArgs, string_id_field


class FloatingIpDescriptor(TypedDict, total=False):
    id: str
    ip: str
    is_ddos_guard: bool
    availability_zone: str
    resource_type: str
    resource_id: int
    comment: str
    created_at: str


class FloatingIpIdArgs(FormattedArgs):
    floating_ip_id: str = string_id_field("Floating IP ID")


class CreateFloatingIpArgs(FormattedArgs):
    availability_zone: str | None = Field(None, description="Availability zone (e.g., 'ru-1a')")
    is_ddos_guard: bool | None = Field(None, description="Enable DDoS protection")
    comment: str | None = Field(None, description="Optional comment")


class BindFloatingIpArgs(FloatingIpIdArgs):
    resource_type: Literal["server", "balancer"] = Field(..., description="Type of resource to bind to")
    resource_id: int = Field(..., gt=0, description="ID of the resource to bind to")


def format_floating_ip(ip: FloatingIpDescriptor) -> str:
    bound = (
        f"{value_or(ip.get('resource_type'))} #{ip['resource_id']}"
        if ip.get("resource_id") else "Not bound"
    )
    return section(f"{value_or(ip.get('ip'))} (ID: {value_or(ip.get('id'))})", [
        bullet("Status", "DDoS Protected" if ip.get("is_ddos_guard") else "Standard"),
        bullet("Bound To", bound),
        bullet("Availability Zone", value_or(ip.get("availability_zone"))),
        bullet("Comment", value_or(ip.get("comment"), "None")),
        bullet("Created", format_date(ip.get("created_at"))),
    ])


OPERATIONS = [
    list_operation(
        "timeweb_list_floating_ips",
        "List all floating IP addresses in the account",
        "/api/v1/floating-ips",
        key="floating_ips",
        title="Floating IP Addresses",
        render_item=format_floating_ip,
        empty="No floating IPs found.",
    ),
    get_operation(
        "timeweb_get_floating_ip",
        "Get detailed information about a specific floating IP",
        "/api/v1/floating-ips/{floating_ip_id}",
        key="floating_ip",
        render_item=format_floating_ip,
        args=FloatingIpIdArgs,
    ),
    create_operation(
        "timeweb_create_floating_ip",
        "Create a new floating IP address",
        "/api/v1/floating-ips",
        key="floating_ip",
        heading="Floating IP Created Successfully",
        render_item=format_floating_ip,
        args=CreateFloatingIpArgs,
    ),
    delete_operation(
        "timeweb_delete_floating_ip",
        "Delete a floating IP address",
        "/api/v1/floating-ips/{floating_ip_id}",
        args=FloatingIpIdArgs,
        message="Floating IP {floating_ip_id} has been deleted successfully.",
        result={"deleted_floating_ip_id": "floating_ip_id"},
    ),
    action_operation(
        "timeweb_bind_floating_ip",
        "Bind a floating IP to a server or other resource",
        "/api/v1/floating-ips/{floating_ip_id}/bind",
        args=BindFloatingIpArgs,
        message="Floating IP {floating_ip_id} has been bound to {resource_type} {resource_id} successfully.",
        result={
            "floating_ip_id": "floating_ip_id",
            "resource_type": "resource_type",
            "resource_id": "resource_id",
        },
        body=lambda args: {"resource_type": args.resource_type, "resource_id": args.resource_id},
    ),
    action_operation(
        "timeweb_unbind_floating_ip",
        "Unbind a floating IP from its current resource",
        "/api/v1/floating-ips/{floating_ip_id}/unbind",
        args=FloatingIpIdArgs,
        message="Floating IP {floating_ip_id} has been unbound successfully.",
        result={"floating_ip_id": "floating_ip_id"},
    ),
]
