"""Tools: load balancers, their forwarding rules and presets."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    collection_operation,
    create_operation,
    delete_operation,
    list_operation,
    unwrap,
    update_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_date, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, id_field

RuleProtocol = Literal["http", "http2", "https", "tcp"]


class BalancerDescriptor(TypedDict, total=False):
    id: int
    name: str
    status: str
    algo: str
    ip: str
    local_ip: str
    port: int
    is_sticky: bool
    is_use_proxy: bool
    is_ssl: bool
    is_keepalive: bool
    inter: int
    fall: int
    rise: int
    timeout: int
    preset_id: int
    availability_zone: str
    created_at: str
    rules: list


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

class BalancerIdArgs(FormattedArgs):
    balancer_id: int = id_field("Load balancer ID")


class BalancerOptions(FormattedArgs):
    algo: Literal["roundrobin", "leastconn"] | None = Field(
        None, description="Load balancing algorithm (default: roundrobin)"
    )
    port: int | None = Field(None, ge=1, le=65535, description="Main port (default: 80)")
    is_sticky: bool | None = Field(None, description="Enable sticky sessions")
    is_use_proxy: bool | None = Field(None, description="Use proxy protocol")
    is_ssl: bool | None = Field(None, description="Enable SSL")
    is_keepalive: bool | None = Field(None, description="Enable keepalive")
    inter: int | None = Field(None, gt=0, description="Health check interval in milliseconds")
    timeout: int | None = Field(None, gt=0, description="Connection timeout in milliseconds")
    fall: int | None = Field(None, gt=0, description="Number of failures before marking as down")
    rise: int | None = Field(None, gt=0, description="Number of successes before marking as up")


class CreateBalancerArgs(BalancerOptions):
    name: str = Field(..., min_length=1, description="Load balancer name")
    preset_id: int = id_field("Preset ID for the balancer configuration")


class UpdateBalancerArgs(BalancerOptions):
    balancer_id: int = id_field("Load balancer ID")
    name: str | None = Field(None, description="New name for the balancer")


class CreateRuleArgs(BalancerIdArgs):
    balancer_proto: RuleProtocol = Field(..., description="Protocol on balancer side")
    balancer_port: int = Field(..., ge=1, le=65535, description="Port on balancer side")
    server_proto: RuleProtocol = Field(..., description="Protocol on server side")
    server_port: int = Field(..., ge=1, le=65535, description="Port on server side")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_balancer(balancer: BalancerDescriptor) -> str:
    health = (
        f"inter={value_or(balancer.get('inter'))}ms, fall={value_or(balancer.get('fall'))}, "
        f"rise={value_or(balancer.get('rise'))}, timeout={value_or(balancer.get('timeout'))}ms"
    )
    return section(f"{value_or(balancer.get('name'))} (ID: {value_or(balancer.get('id'))})", [
        bullet("Status", value_or(balancer.get("status"))),
        bullet("Algorithm", value_or(balancer.get("algo"))),
        bullet("IP", value_or(balancer.get("ip"), "Not assigned")),
        bullet("Local IP", value_or(balancer.get("local_ip"))),
        bullet("Port", value_or(balancer.get("port"))),
        bullet("Sticky Sessions", yes_no(balancer.get("is_sticky"))),
        bullet("Use Proxy", yes_no(balancer.get("is_use_proxy"))),
        bullet("SSL", yes_no(balancer.get("is_ssl"))),
        bullet("Keepalive", yes_no(balancer.get("is_keepalive"))),
        bullet("Health Check", health),
        bullet("Preset ID", value_or(balancer.get("preset_id"))),
        bullet("Availability Zone", value_or(balancer.get("availability_zone"))),
        bullet("Created", format_date(balancer.get("created_at"))),
        bullet("Rules", len(balancer.get("rules") or [])),
    ])


def format_rule(rule: dict) -> str:
    inbound = f"{str(value_or(rule.get('balancer_proto'))).upper()}:{value_or(rule.get('balancer_port'))}"
    outbound = f"{str(value_or(rule.get('server_proto'))).upper()}:{value_or(rule.get('server_port'))}"
    return f"- **Rule {value_or(rule.get('id'))}:** {inbound} → {outbound}"


def format_balancer_preset(preset: dict) -> str:
    return section(f"Preset {value_or(preset.get('id'))}", [
        bullet("Description", value_or(preset.get("description"))),
        bullet("Bandwidth", f"{value_or(preset.get('bandwidth'))} Mbps"),
        bullet("Replicas", value_or(preset.get("replica_count"))),
        bullet("RPS", value_or(preset.get("request_per_second"), "Unlimited")),
        bullet("Price", f"{value_or(preset.get('price'))} {preset.get('currency') or ''}/month"),
        bullet("Location", value_or(preset.get("location"))),
    ])


def render_balancer(payload, args) -> str:
    balancer = payload.get("balancer") or {}
    text = format_balancer(balancer)
    rules = balancer.get("rules") or []
    if rules:
        text += "\n\n### Rules\n" + "\n".join(format_rule(rule) for rule in rules)
    return text


OPERATIONS = [
    list_operation(
        "timeweb_list_balancers",
        "List all load balancers in the account",
        "/api/v1/balancers",
        key="balancers",
        title="Load Balancers",
        render_item=format_balancer,
        empty="No load balancers found.",
    ),
    Operation(
        "timeweb_get_balancer",
        "Get detailed information about a specific load balancer",
        BalancerIdArgs,
        "GET",
        "/api/v1/balancers/{balancer_id}",
        render=render_balancer,
        structured=unwrap("balancer"),
    ),
    create_operation(
        "timeweb_create_balancer",
        "Create a new load balancer",
        "/api/v1/balancers",
        key="balancer",
        heading="Load Balancer Created Successfully",
        render_item=format_balancer,
        args=CreateBalancerArgs,
    ),
    update_operation(
        "timeweb_update_balancer",
        "Update load balancer settings",
        "/api/v1/balancers/{balancer_id}",
        key="balancer",
        heading="Load Balancer Updated Successfully",
        render_item=format_balancer,
        args=UpdateBalancerArgs,
    ),
    delete_operation(
        "timeweb_delete_balancer",
        "Delete a load balancer permanently",
        "/api/v1/balancers/{balancer_id}",
        args=BalancerIdArgs,
        message="Load balancer {balancer_id} has been deleted successfully.",
        result={"deleted_balancer_id": "balancer_id"},
    ),
    collection_operation(
        "timeweb_list_balancer_rules",
        "List forwarding rules of a load balancer",
        "/api/v1/balancers/{balancer_id}/rules",
        key="rules",
        title="Balancer Rules (Balancer {balancer_id})",
        render_item=format_rule,
        empty="No rules found for balancer {balancer_id}.",
        args=BalancerIdArgs,
        json_key="rules",
        context=("balancer_id",),
        separator="\n",
    ),
    create_operation(
        "timeweb_create_balancer_rule",
        "Create a forwarding rule on a load balancer",
        "/api/v1/balancers/{balancer_id}/rules",
        key="rule",
        heading="Balancer Rule Created Successfully",
        render_item=format_rule,
        args=CreateRuleArgs,
    ),
    collection_operation(
        "timeweb_list_balancer_presets",
        "List available load balancer presets",
        "/api/v1/presets/balancers",
        key="balancers_presets",
        title="Load Balancer Presets",
        render_item=format_balancer_preset,
        empty="No balancer presets found.",
    ),
]
