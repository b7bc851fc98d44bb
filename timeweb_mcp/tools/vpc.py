"""Tools: virtual private clouds and the services attached to them."""

from __future__ import annotations

from typing import TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    collection_operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
    update_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_date, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, Location, location_field, string_id_field


class VpcDescriptor(TypedDict, total=False):
    id: str
    name: str
    subnet_v4: str
    location: str
    availability_zone: str
    description: str
    is_default: bool
    created_at: str


class VpcIdArgs(FormattedArgs):
    vpc_id: str = string_id_field("VPC ID")


class CreateVpcArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="VPC name")
    subnet_v4: str | None = Field(
        None,
        description="IPv4 subnet in CIDR notation (e.g., '10.0.0.0/24'). Auto-assigned if not provided.",
    )
    location: Location | None = location_field("VPC location")
    description: str | None = Field(None, description="VPC description")


class UpdateVpcArgs(VpcIdArgs):
    name: str | None = Field(None, description="New VPC name")
    description: str | None = Field(None, description="New VPC description")


def format_vpc(vpc: VpcDescriptor) -> str:
    return section(f"{value_or(vpc.get('name'))} (ID: {value_or(vpc.get('id'))})", [
        bullet("Subnet", value_or(vpc.get("subnet_v4"))),
        bullet("Location", value_or(vpc.get("location"))),
        bullet("Availability Zone", value_or(vpc.get("availability_zone"))),
        bullet("Description", value_or(vpc.get("description"))),
        bullet("Default", yes_no(vpc.get("is_default"))),
        bullet("Created", format_date(vpc.get("created_at"))),
    ])


def format_vpc_service(service: dict) -> str:
    return (
        f"- **{value_or(service.get('name'))}** (ID: {value_or(service.get('id'))}) - "
        f"{value_or(service.get('type'))} | Status: {value_or(service.get('status'))} | "
        f"IP: {value_or(service.get('ip'))}"
    )


OPERATIONS = [
    list_operation(
        "timeweb_list_vpcs",
        "List all virtual private clouds (VPCs) in the account",
        "/api/v2/vpcs",
        key="vpcs",
        title="Virtual Private Clouds (VPCs)",
        render_item=format_vpc,
        empty="No VPCs found.",
    ),
    get_operation(
        "timeweb_get_vpc",
        "Get detailed information about a specific VPC",
        "/api/v2/vpcs/{vpc_id}",
        key="vpc",
        render_item=format_vpc,
        args=VpcIdArgs,
    ),
    create_operation(
        "timeweb_create_vpc",
        "Create a new virtual private cloud",
        "/api/v2/vpcs",
        key="vpc",
        heading="VPC Created Successfully",
        render_item=format_vpc,
        args=CreateVpcArgs,
    ),
    update_operation(
        "timeweb_update_vpc",
        "Update a VPC's name or description",
        "/api/v2/vpcs/{vpc_id}",
        key="vpc",
        heading="VPC Updated Successfully",
        render_item=format_vpc,
        args=UpdateVpcArgs,
    ),
    delete_operation(
        "timeweb_delete_vpc",
        "Delete a VPC (all services must be detached first)",
        "/api/v2/vpcs/{vpc_id}",
        args=VpcIdArgs,
        message="VPC {vpc_id} has been deleted successfully.",
        result={"deleted_vpc_id": "vpc_id"},
    ),
    collection_operation(
        "timeweb_list_vpc_services",
        "List all services (servers, databases, etc.) attached to a VPC",
        "/api/v2/vpcs/{vpc_id}/services",
        key="services",
        title="VPC Services (VPC {vpc_id})",
        render_item=format_vpc_service,
        empty="No services attached to VPC {vpc_id}.",
        args=VpcIdArgs,
        json_key="services",
        context=("vpc_id",),
        summary=lambda services: f"**Total:** {len(services)} services",
        separator="\n",
    ),
]
