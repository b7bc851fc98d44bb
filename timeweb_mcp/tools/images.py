"""Tools: custom OS images built from server disks."""

from __future__ import annotations

from typing import TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
    update_operation,
)
from timeweb_mcp.shared.formatting import bullet, format_bytes, format_date, section, value_or
from timeweb_mcp.shared.schemas import FormattedArgs, id_field, string_id_field


class ImageDescriptor(TypedDict, total=False):
    id: str
    name: str
    status: str
    progress: int
    size: int
    location: str
    os: dict
    description: str
    created_at: str


class ImageIdArgs(FormattedArgs):
    image_id: str = string_id_field("Image ID")


class CreateImageArgs(FormattedArgs):
    disk_id: int = id_field("Server disk ID to create image from")
    name: str = Field(..., min_length=1, description="Image name")
    description: str | None = Field(None, description="Image description")


class UpdateImageArgs(ImageIdArgs):
    name: str | None = Field(None, description="New image name")
    description: str | None = Field(None, description="New image description")


def format_image(image: ImageDescriptor) -> str:
    progress = image.get("progress")
    status = str(value_or(image.get("status")))
    if progress is not None and progress < 100:
        status += f" ({progress}%)"
    os_info = image.get("os") or {}
    return section(f"{value_or(image.get('name'))} (ID: {value_or(image.get('id'))})", [
        bullet("Status", status),
        bullet("Size", format_bytes(image.get("size"))),
        bullet("Location", value_or(image.get("location"))),
        bullet("OS", f"{value_or(os_info.get('name'))} {os_info.get('version') or ''}".rstrip()),
        bullet("Description", value_or(image.get("description"))),
        bullet("Created", format_date(image.get("created_at"))),
    ])


OPERATIONS = [
    list_operation(
        "timeweb_list_images",
        "List all custom OS images in the account",
        "/api/v1/images",
        key="images",
        title="Custom OS Images",
        render_item=format_image,
        empty="No custom images found.",
    ),
    get_operation(
        "timeweb_get_image",
        "Get detailed information about a specific custom image",
        "/api/v1/images/{image_id}",
        key="image",
        render_item=format_image,
        args=ImageIdArgs,
    ),
    create_operation(
        "timeweb_create_image",
        "Create a custom OS image from a server disk",
        "/api/v1/images",
        key="image",
        heading="Image Creation Started",
        render_item=format_image,
        args=CreateImageArgs,
        footer="*Note: Image creation may take several minutes. Check status with timeweb_get_image.*",
    ),
    update_operation(
        "timeweb_update_image",
        "Update a custom image's name or description",
        "/api/v1/images/{image_id}",
        key="image",
        heading="Image Updated Successfully",
        render_item=format_image,
        args=UpdateImageArgs,
    ),
    delete_operation(
        "timeweb_delete_image",
        "Delete a custom image permanently",
        "/api/v1/images/{image_id}",
        args=ImageIdArgs,
        message="Image {image_id} has been deleted successfully.",
        result={"deleted_image_id": "image_id"},
    ),
]
