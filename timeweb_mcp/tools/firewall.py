"""Tools: firewall groups and rules."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
    update_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_date, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, PaginatedArgs, id_field

Policy = Literal["allow", "deny"]


class FirewallGroupDescriptor(TypedDict, total=False):
    id: int
    name: str
    description: str
    is_default: bool
    incoming_traffic_policy: str
    outgoing_traffic_policy: str
    server_ids: list
    created_at: str


class FirewallRuleDescriptor(TypedDict, total=False):
    id: int
    direction: str
    protocol: str
    port: str
    cidr: str
    description: str


class GroupIdArgs(FormattedArgs):
    group_id: int = id_field("Firewall group ID")


class CreateGroupArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Firewall group name")
    description: str | None = Field(None, description="Description of the firewall group")
    incoming_traffic_policy: Policy | None = Field(
        None, description="Default policy for incoming traffic (default: deny)"
    )
    outgoing_traffic_policy: Policy | None = Field(
        None, description="Default policy for outgoing traffic (default: allow)"
    )


class UpdateGroupArgs(GroupIdArgs):
    name: str | None = Field(None, description="New name for the firewall group")
    description: str | None = Field(None, description="New description")
    incoming_traffic_policy: Policy | None = Field(None, description="Default policy for incoming traffic")
    outgoing_traffic_policy: Policy | None = Field(None, description="Default policy for outgoing traffic")


class RuleListArgs(PaginatedArgs):
    group_id: int = id_field("Firewall group ID")


class CreateRuleArgs(GroupIdArgs):
    direction: Literal["ingress", "egress"] = Field(
        ..., description="Traffic direction (ingress = incoming, egress = outgoing)"
    )
    protocol: Literal["tcp", "udp", "icmp", "any"] = Field(..., description="Network protocol")
    port: str | None = Field(None, description="Port or port range (e.g., '22', '80-443', or empty for all)")
    cidr: str = Field(
        ...,
        min_length=1,
        description="CIDR block (e.g., '0.0.0.0/0' for any, '192.168.1.0/24' for specific subnet)",
    )
    description: str | None = Field(None, description="Rule description")


class RuleIdArgs(GroupIdArgs):
    rule_id: int = id_field("Firewall rule ID")


def format_group(group: FirewallGroupDescriptor) -> str:
    servers = group.get("server_ids") or []
    return section(f"{value_or(group.get('name'))} (ID: {value_or(group.get('id'))})", [
        bullet("Description", value_or(group.get("description"))),
        bullet("Default", yes_no(group.get("is_default"))),
        bullet("Incoming Policy", value_or(group.get("incoming_traffic_policy"))),
        bullet("Outgoing Policy", value_or(group.get("outgoing_traffic_policy"))),
        bullet("Linked Servers", ", ".join(str(s) for s in servers) if servers else "None"),
        bullet("Created", format_date(group.get("created_at"))),
    ])


def format_rule(rule: FirewallRuleDescriptor) -> str:
    text = (
        f"- **Rule {value_or(rule.get('id'))}:** {str(value_or(rule.get('direction'))).upper()} | "
        f"{str(value_or(rule.get('protocol'))).upper()} | Port: {rule.get('port') or 'all'} | "
        f"CIDR: {value_or(rule.get('cidr'))}"
    )
    if rule.get("description"):
        text += f" | {rule['description']}"
    return text


OPERATIONS = [
    list_operation(
        "timeweb_list_firewall_groups",
        "List all firewall groups in the account",
        "/api/v1/firewall/groups",
        key="groups",
        title="Firewall Groups",
        render_item=format_group,
        empty="No firewall groups found.",
    ),
    get_operation(
        "timeweb_get_firewall_group",
        "Get detailed information about a specific firewall group",
        "/api/v1/firewall/groups/{group_id}",
        key="group",
        render_item=format_group,
        args=GroupIdArgs,
    ),
    create_operation(
        "timeweb_create_firewall_group",
        "Create a new firewall group",
        "/api/v1/firewall/groups",
        key="group",
        heading="Firewall Group Created Successfully",
        render_item=format_group,
        args=CreateGroupArgs,
    ),
    update_operation(
        "timeweb_update_firewall_group",
        "Update an existing firewall group",
        "/api/v1/firewall/groups/{group_id}",
        key="group",
        heading="Firewall Group Updated Successfully",
        render_item=format_group,
        args=UpdateGroupArgs,
    ),
    delete_operation(
        "timeweb_delete_firewall_group",
        "Delete a firewall group permanently",
        "/api/v1/firewall/groups/{group_id}",
        args=GroupIdArgs,
        message="Firewall group {group_id} has been deleted successfully.",
        result={"deleted_group_id": "group_id"},
    ),
    list_operation(
        "timeweb_list_firewall_rules",
        "List all rules in a firewall group",
        "/api/v1/firewall/groups/{group_id}/rules",
        key="rules",
        title="Firewall Rules (Group {group_id})",
        render_item=format_rule,
        empty="No firewall rules found in group {group_id}.",
        args=RuleListArgs,
        context=("group_id",),
        separator="\n",
    ),
    create_operation(
        "timeweb_create_firewall_rule",
        "Create a new firewall rule in a group",
        "/api/v1/firewall/groups/{group_id}/rules",
        key="rule",
        heading="Firewall Rule Created Successfully",
        render_item=format_rule,
        args=CreateRuleArgs,
    ),
    delete_operation(
        "timeweb_delete_firewall_rule",
        "Delete a firewall rule from a group",
        "/api/v1/firewall/groups/{group_id}/rules/{rule_id}",
        args=RuleIdArgs,
        message="Firewall rule {rule_id} has been deleted from group {group_id} successfully.",
        result={"deleted_rule_id": "rule_id", "group_id": "group_id"},
    ),
]
