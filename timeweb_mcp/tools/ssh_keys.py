"""Tools: SSH keys and attaching them to servers."""

from __future__ import annotations

from typing import TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    action_operation,
    create_operation,
    delete_operation,
    list_operation,
    unwrap,
)
from timeweb_mcp.shared.formatting import bullet, code_block, format_date, section, value_or
from timeweb_mcp.shared.schemas import FormattedArgs, id_field


class SshKeyDescriptor(TypedDict, total=False):
    id: int
    name: str
    body: str
    fingerprint: str
    used_by: list
    created_at: str


class SshKeyIdArgs(FormattedArgs):
    ssh_key_id: int = id_field("SSH key ID")


class CreateSshKeyArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="SSH key name")
    body: str = Field(..., min_length=1, description="Public SSH key content (e.g., 'ssh-rsa AAAAB3...')")


class AddKeyToServerArgs(FormattedArgs):
    server_id: int = id_field("Server ID")
    ssh_key_id: int = id_field("SSH key ID to add")


def format_ssh_key(key: SshKeyDescriptor) -> str:
    return section(f"{value_or(key.get('name'))} (ID: {value_or(key.get('id'))})", [
        bullet("Fingerprint", value_or(key.get("fingerprint"))),
        bullet("Used By", f"{len(key.get('used_by') or [])} servers"),
        bullet("Created", format_date(key.get("created_at"))),
    ])


def render_ssh_key(payload, args) -> str:
    key = payload.get("ssh_key") or {}
    text = format_ssh_key(key)
    if key.get("body"):
        text += f"\n\n**Public Key:**\n{code_block(key['body'])}"
    return text


OPERATIONS = [
    list_operation(
        "timeweb_list_ssh_keys",
        "List all SSH keys in the account",
        "/api/v1/ssh-keys",
        key="ssh_keys",
        title="SSH Keys",
        render_item=format_ssh_key,
        empty="No SSH keys found.",
    ),
    Operation(
        "timeweb_get_ssh_key",
        "Get detailed information about a specific SSH key",
        SshKeyIdArgs,
        "GET",
        "/api/v1/ssh-keys/{ssh_key_id}",
        render=render_ssh_key,
        structured=unwrap("ssh_key"),
    ),
    create_operation(
        "timeweb_create_ssh_key",
        "Create a new SSH key",
        "/api/v1/ssh-keys",
        key="ssh_key",
        heading="SSH Key Created Successfully",
        render_item=format_ssh_key,
        args=CreateSshKeyArgs,
    ),
    delete_operation(
        "timeweb_delete_ssh_key",
        "Delete an SSH key",
        "/api/v1/ssh-keys/{ssh_key_id}",
        args=SshKeyIdArgs,
        message="SSH key {ssh_key_id} has been deleted successfully.",
        result={"deleted_ssh_key_id": "ssh_key_id"},
    ),
    action_operation(
        "timeweb_add_ssh_key_to_server",
        "Add an SSH key to a server for authentication",
        "/api/v1/servers/{server_id}/ssh-keys",
        args=AddKeyToServerArgs,
        message="SSH key {ssh_key_id} has been added to server {server_id} successfully.",
        result={"server_id": "server_id", "ssh_key_id": "ssh_key_id"},
        body=lambda args: {"ssh_key_id": args.ssh_key_id},
    ),
]
