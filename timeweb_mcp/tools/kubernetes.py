"""Tools: managed Kubernetes clusters."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import BaseModel, Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    collection_operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import bullet, code_block, format_date, section, value_or
from timeweb_mcp.shared.schemas import FormattedArgs, ToolArgs, id_field


class ClusterDescriptor(TypedDict, total=False):
    id: int
    name: str
    status: str
    description: str
    k8s_version: str
    network_driver: str
    ingress: bool
    cpu: int
    ram: int
    disk: int
    preset_id: int
    created_at: str


class WorkerGroup(BaseModel):
    name: str = Field(..., min_length=1, description="Worker group name")
    preset_id: int = Field(..., gt=0, description="Preset ID for workers")
    node_count: int = Field(..., ge=1, description="Number of worker nodes")


class ClusterIdArgs(FormattedArgs):
    cluster_id: int = id_field("Kubernetes cluster ID")


class KubeconfigArgs(ToolArgs):
    cluster_id: int = id_field("Kubernetes cluster ID")


class CreateClusterArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Cluster name")
    k8s_version: str | None = Field(None, description="Kubernetes version (e.g., '1.28')")
    preset_id: int = id_field("Node preset ID")
    worker_groups: list[WorkerGroup] | None = Field(None, description="Worker node groups")
    network_driver: Literal["flannel", "cilium"] | None = Field(None, description="Network driver")
    ingress: bool | None = Field(None, description="Enable ingress controller")
    description: str | None = Field(None, description="Cluster description")


def format_cluster(cluster: ClusterDescriptor) -> str:
    return section(f"{value_or(cluster.get('name'))} (ID: {value_or(cluster.get('id'))})", [
        bullet("Status", value_or(cluster.get("status"))),
        bullet("Description", value_or(cluster.get("description"))),
        bullet("Version", value_or(cluster.get("k8s_version"))),
        bullet("Network Driver", value_or(cluster.get("network_driver"))),
        bullet("Ingress", "Enabled" if cluster.get("ingress") else "Disabled"),
        bullet("CPU", f"{value_or(cluster.get('cpu'))} cores"),
        bullet("RAM", f"{value_or(cluster.get('ram'))} MB"),
        bullet("Disk", f"{value_or(cluster.get('disk'))} MB"),
        bullet("Preset ID", value_or(cluster.get("preset_id"))),
        bullet("Created", format_date(cluster.get("created_at"))),
    ])


def format_version(version: dict) -> str:
    default = " (Default)" if version.get("is_default") else ""
    return f"- **{value_or(version.get('version'))}**{default}"


def render_kubeconfig(payload, args: KubeconfigArgs) -> str:
    config = payload.get("config") or ""
    return f"# Kubeconfig for Cluster {args.cluster_id}\n\n{code_block(config, 'yaml')}"


OPERATIONS = [
    list_operation(
        "timeweb_list_k8s_clusters",
        "List all Kubernetes clusters in the account",
        "/api/v1/k8s/clusters",
        key="clusters",
        title="Kubernetes Clusters",
        render_item=format_cluster,
        empty="No Kubernetes clusters found.",
    ),
    get_operation(
        "timeweb_get_k8s_cluster",
        "Get detailed information about a specific Kubernetes cluster",
        "/api/v1/k8s/clusters/{cluster_id}",
        key="cluster",
        render_item=format_cluster,
        args=ClusterIdArgs,
    ),
    create_operation(
        "timeweb_create_k8s_cluster",
        "Create a new Kubernetes cluster",
        "/api/v1/k8s/clusters",
        key="cluster",
        heading="Kubernetes Cluster Created Successfully",
        render_item=format_cluster,
        args=CreateClusterArgs,
    ),
    delete_operation(
        "timeweb_delete_k8s_cluster",
        "Delete a Kubernetes cluster permanently",
        "/api/v1/k8s/clusters/{cluster_id}",
        args=ClusterIdArgs,
        message="Kubernetes cluster {cluster_id} has been deleted successfully.",
        result={"deleted_cluster_id": "cluster_id"},
    ),
    Operation(
        "timeweb_get_kubeconfig",
        "Get kubeconfig file for a Kubernetes cluster",
        KubeconfigArgs,
        "GET",
        "/api/v1/k8s/clusters/{cluster_id}/kubeconfig",
        render=render_kubeconfig,
    ),
    collection_operation(
        "timeweb_list_k8s_versions",
        "List available Kubernetes versions",
        "/api/v1/k8s/k8s_versions",
        key="k8s_versions",
        title="Available Kubernetes Versions",
        render_item=format_version,
        empty="No Kubernetes versions found.",
        separator="\n",
    ),
]
