"""Tools: S3-compatible object storage buckets."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    collection_operation,
    create_operation,
    delete_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import (
    bullet,
    format_bytes,
    format_date,
    format_megabytes,
    section,
    value_or,
)
from timeweb_mcp.shared.schemas import FormattedArgs, Location, id_field, location_field


class BucketDescriptor(TypedDict, total=False):
    id: int
    name: str
    status: str
    location: str
    type: str
    disk_stats: dict
    endpoint: str
    access_key: str
    created_at: str


class BucketIdArgs(FormattedArgs):
    bucket_id: int = id_field("Storage bucket ID")


class CreateBucketArgs(FormattedArgs):
    name: str = Field(
        ..., min_length=1, description="Storage bucket name (must be unique and follow S3 naming rules)"
    )
    preset_id: int = id_field("Storage preset ID")
    type: Literal["private", "public"] | None = Field(None, description="Storage type (default: private)")
    location: Location | None = location_field("Storage location")


def format_bucket(bucket: BucketDescriptor) -> str:
    stats = bucket.get("disk_stats") or {}
    return section(f"{value_or(bucket.get('name'))} (ID: {value_or(bucket.get('id'))})", [
        bullet("Status", value_or(bucket.get("status"))),
        bullet("Location", value_or(bucket.get("location"))),
        bullet("Type", value_or(bucket.get("type"))),
        bullet("Disk Used", f"{format_bytes(stats.get('used') or 0)} / {format_bytes(stats.get('size') or 0)}"),
        bullet("Endpoint", value_or(bucket.get("endpoint"))),
        bullet("Access Key", value_or(bucket.get("access_key"))),
        bullet("Created", format_date(bucket.get("created_at"))),
    ])


def format_storage_preset(preset: dict) -> str:
    return section(f"{preset.get('description') or 'Preset'} (ID: {value_or(preset.get('id'))})", [
        bullet("Disk", format_megabytes(preset.get("disk"))),
        bullet("Price", f"{value_or(preset.get('price'))} {preset.get('currency') or ''}/month"),
        bullet("Location", value_or(preset.get("location"))),
    ])


OPERATIONS = [
    list_operation(
        "timeweb_list_s3_storages",
        "List all S3-compatible object storages in the account",
        "/api/v1/storages/buckets",
        key="buckets",
        json_key="storages",
        title="S3 Object Storages",
        render_item=format_bucket,
        empty="No S3 storages found.",
    ),
    create_operation(
        "timeweb_create_s3_storage",
        "Create a new S3-compatible object storage bucket",
        "/api/v1/storages/buckets",
        key="bucket",
        heading="S3 Storage Created Successfully",
        render_item=format_bucket,
        args=CreateBucketArgs,
    ),
    delete_operation(
        "timeweb_delete_s3_storage",
        "Delete an S3 storage bucket permanently",
        "/api/v1/storages/buckets/{bucket_id}",
        args=BucketIdArgs,
        message="S3 storage bucket {bucket_id} has been deleted successfully.",
        result={"deleted_bucket_id": "bucket_id"},
    ),
    collection_operation(
        "timeweb_list_s3_presets",
        "List available S3 storage configuration presets",
        "/api/v1/presets/storages",
        key="storages_presets",
        title="S3 Storage Presets",
        render_item=format_storage_preset,
        empty="No S3 storage presets found.",
    ),
]
