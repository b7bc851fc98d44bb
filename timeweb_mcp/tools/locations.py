"""Tool: datacenter locations."""

from __future__ import annotations

from timeweb_mcp.shared.dispatch import collection_operation
from timeweb_mcp.shared.formatting import bullet, section, value_or


def format_location(location: dict) -> str:
    return section(str(location.get("description") or value_or(location.get("id"))), [
        bullet("ID", value_or(location.get("id"))),
        bullet("Country", value_or(location.get("country"))),
        bullet("City", value_or(location.get("city"))),
    ])


OPERATIONS = [
    collection_operation(
        "timeweb_list_locations",
        "List all available datacenter locations for provisioning resources",
        "/api/v2/locations",
        key="locations",
        title="Available Datacenter Locations",
        render_item=format_location,
        empty="No locations found.",
    ),
]
