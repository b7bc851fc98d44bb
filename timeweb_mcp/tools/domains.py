"""Tools: domains, availability checks and DNS records."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import bullet, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, PaginatedArgs, id_field, string_id_field

RecordType = Literal["A", "AAAA", "CNAME", "MX", "TXT", "NS", "SRV", "CAA"]


class DomainDescriptor(TypedDict, total=False):
    id: int
    fqdn: str
    linked_ip: str
    subdomains: list
    is_autoprolong_enabled: bool
    is_whois_privacy_enabled: bool
    expiration_date: str


class DnsRecordDescriptor(TypedDict, total=False):
    id: int
    type: str
    subdomain: str
    value: str
    ttl: int


class DomainArgs(FormattedArgs):
    fqdn: str = string_id_field("Fully qualified domain name (e.g., example.com)")


class DnsRecordListArgs(PaginatedArgs):
    fqdn: str = string_id_field("Fully qualified domain name")


class CreateDnsRecordArgs(FormattedArgs):
    fqdn: str = string_id_field("Fully qualified domain name")
    type: RecordType = Field(..., description="DNS record type")
    value: str = Field(..., min_length=1, description="Record value (IP address, hostname, etc.)")
    subdomain: str | None = Field(None, description="Subdomain (leave empty for root domain)")
    priority: int | None = Field(None, ge=0, description="Priority (for MX and SRV records)")
    ttl: int | None = Field(None, gt=0, description="Time to live in seconds")


class DnsRecordIdArgs(FormattedArgs):
    fqdn: str = string_id_field("Fully qualified domain name")
    record_id: int = id_field("DNS record ID")


def format_domain(domain: DomainDescriptor) -> str:
    return section(f"{value_or(domain.get('fqdn'))} (ID: {value_or(domain.get('id'))})", [
        bullet("Linked IP", value_or(domain.get("linked_ip"), "None")),
        bullet("Subdomains", len(domain.get("subdomains") or [])),
        bullet("Auto-Renew", yes_no(domain.get("is_autoprolong_enabled"))),
        bullet("Privacy", "Enabled" if domain.get("is_whois_privacy_enabled") else "Disabled"),
        bullet("Expiration", value_or(domain.get("expiration_date"))),
    ])


def format_dns_record(record: DnsRecordDescriptor) -> str:
    return (
        f"- **{value_or(record.get('type'))}** {record.get('subdomain') or '@'} → "
        f"{value_or(record.get('value'))} (TTL: {record.get('ttl') or 'default'})"
    )


def render_availability(payload, args: DomainArgs) -> str:
    available = "Yes ✓" if payload.get("is_domain_available") else "No ✗"
    text = f"# Domain Availability: {args.fqdn}\n\n**Available:** {available}"
    suggestions = payload.get("suggestions") or []
    if suggestions:
        text += "\n\n## Suggestions\n" + "\n".join(f"- {name}" for name in suggestions)
    return text


OPERATIONS = [
    list_operation(
        "timeweb_list_domains",
        "List all domains in the account",
        "/api/v1/domains",
        key="domains",
        title="Domains",
        render_item=format_domain,
        empty="No domains found.",
    ),
    get_operation(
        "timeweb_get_domain",
        "Get detailed information about a specific domain",
        "/api/v1/domains/{fqdn}",
        key="domain",
        render_item=format_domain,
        args=DomainArgs,
    ),
    Operation(
        "timeweb_check_domain",
        "Check if a domain is available for registration",
        DomainArgs,
        "GET",
        "/api/v1/check-domain/{fqdn}",
        render=render_availability,
    ),
    list_operation(
        "timeweb_list_dns_records",
        "List DNS records for a domain",
        "/api/v1/domains/{fqdn}/dns-records",
        key="dns_records",
        json_key="records",
        title="DNS Records for {fqdn}",
        render_item=format_dns_record,
        empty="No DNS records found for {fqdn}.",
        args=DnsRecordListArgs,
        separator="\n",
    ),
    create_operation(
        "timeweb_create_dns_record",
        "Create a new DNS record for a domain",
        "/api/v1/domains/{fqdn}/dns-records",
        key="dns_record",
        heading="DNS Record Created",
        render_item=format_dns_record,
        args=CreateDnsRecordArgs,
    ),
    delete_operation(
        "timeweb_delete_dns_record",
        "Delete a DNS record",
        "/api/v1/domains/{fqdn}/dns-records/{record_id}",
        args=DnsRecordIdArgs,
        message="DNS record {record_id} has been deleted successfully.",
        result={"deleted_record_id": "record_id"},
    ),
]
