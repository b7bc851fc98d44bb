"""Tools: PaaS applications, deployments, logs and statistics."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    action_operation,
    create_operation,
    delete_operation,
    list_operation,
    unwrap,
    update_operation,
)
from timeweb_mcp.shared.formatting import (
    average_percent,
    bullet,
    code_block,
    format_date,
    format_megabytes,
    section,
    value_or,
)
from timeweb_mcp.shared.schemas import FormattedArgs, PaginatedArgs, id_field

AppType = Literal["nodejs", "python", "php", "go", "ruby", "static"]

# Argument names that differ from the API's field names
FIELD_RENAMES = {"build_command": "build_cmd", "run_command": "run_cmd"}


class AppDescriptor(TypedDict, total=False):
    id: int
    name: str
    type: str
    status: str
    framework: dict
    repository: dict
    branch: str
    commit: dict
    preset: dict
    domains: list
    envs: list
    created_at: str


class DeployDescriptor(TypedDict, total=False):
    id: int
    status: str
    created_at: str
    commit: dict


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

class AppIdArgs(FormattedArgs):
    app_id: int = id_field("Application ID")


class CreateAppArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Application name")
    type: AppType = Field(..., description="Application type")
    preset_id: int = id_field("Preset ID for resources")
    repository_id: int = id_field("GitHub repository ID (from connected account)")
    branch: str | None = Field(None, description="Git branch to deploy (default: main)")
    build_command: str | None = Field(None, description="Build command (e.g., 'npm run build')")
    run_command: str | None = Field(None, description="Run command (e.g., 'npm start')")
    envs: dict[str, str] | None = Field(None, description="Environment variables as key-value pairs")


class UpdateAppArgs(AppIdArgs):
    name: str | None = Field(None, description="New application name")
    preset_id: int | None = Field(None, gt=0, description="New preset ID for resources")
    branch: str | None = Field(None, description="New git branch")
    build_command: str | None = Field(None, description="New build command")
    run_command: str | None = Field(None, description="New run command")
    envs: dict[str, str] | None = Field(None, description="Environment variables (replaces all)")


class AppActionArgs(AppIdArgs):
    action: Literal["start", "stop", "restart"] = Field(..., description="Action to perform")


class DeployAppArgs(AppIdArgs):
    commit_id: str | None = Field(
        None, description="Specific commit ID to deploy (latest if not specified)"
    )


class DeployListArgs(PaginatedArgs):
    app_id: int = id_field("Application ID")


class DeployIdArgs(AppIdArgs):
    deploy_id: int = id_field("Deployment ID")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_app(app: AppDescriptor) -> str:
    framework = app.get("framework") or {}
    repository = app.get("repository") or {}
    commit = app.get("commit") or {}
    preset = app.get("preset") or {}
    domains = app.get("domains") or []
    preset_line = (
        f"{value_or(preset.get('name'))} ({preset.get('cpu') or 0} CPU, "
        f"{format_megabytes(preset.get('ram') or None)} RAM)"
    )
    return section(f"{value_or(app.get('name'))} (ID: {value_or(app.get('id'))})", [
        bullet("Type", value_or(app.get("type"))),
        bullet("Status", value_or(app.get("status"))),
        bullet("Framework", value_or(framework.get("name"))),
        bullet("Repository", value_or(repository.get("full_name"))),
        bullet("Branch", value_or(app.get("branch"))),
        bullet("Last Commit", value_or((commit.get("message") or "")[:50])),
        bullet("Preset", preset_line),
        bullet("Domains", ", ".join(str(d) for d in domains) if domains else "N/A"),
        bullet("Created", format_date(app.get("created_at"))),
    ])


def format_deploy(deploy: DeployDescriptor) -> str:
    commit = deploy.get("commit") or {}
    return (
        f"- **Deploy {value_or(deploy.get('id'))}:** {value_or(deploy.get('status'))} | "
        f"{value_or((commit.get('message') or '')[:40])} | {format_date(deploy.get('created_at'))}"
    )


def render_app(payload, args) -> str:
    app = payload.get("app") or {}
    text = format_app(app)
    envs = app.get("envs") or []
    if envs:
        # Values may hold secrets; only the keys are shown
        text += "\n\n### Environment Variables\n" + "\n".join(f"- `{env.get('key')}`" for env in envs)
    return text


def app_body(args) -> dict:
    """Supplied fields with API names; envs become a list of key/value pairs."""
    body = {}
    for field in ("name", "type", "preset_id", "repository_id", "branch", "build_command", "run_command"):
        value = getattr(args, field, None)
        if value is not None:
            body[FIELD_RENAMES.get(field, field)] = value
    if args.envs is not None:
        body["envs"] = [{"key": key, "value": value} for key, value in args.envs.items()]
    return body


def logs_operation(name: str, description: str, path: str, args, *, title: str, empty: str,
                   context: tuple[str, ...]) -> Operation:
    """Plain-text log retrieval rendered as a code block."""

    def structured(payload, args):
        return {"logs": payload.get("logs") or "", **{field: getattr(args, field) for field in context}}

    def render(payload, args):
        logs = payload.get("logs") or ""
        values = args.model_dump()
        if not logs:
            return empty.format(**values)
        return f"# {title.format(**values)}\n\n{code_block(logs)}"

    return Operation(name, description, args, "GET", path, render, structured)


def statistics_structured(payload, args: AppIdArgs) -> dict:
    return {"statistics": payload.get("statistics"), "app_id": args.app_id}


def render_statistics(payload, args: AppIdArgs) -> str:
    stats = payload.get("statistics") or {}
    return "\n".join([
        f"# Application Statistics (App {args.app_id})",
        "",
        bullet("Average CPU Usage", average_percent(stats.get("cpu"))),
        bullet("Average RAM Usage", average_percent(stats.get("ram"))),
        bullet("CPU samples", len(stats.get("cpu") or [])),
        bullet("RAM samples", len(stats.get("ram") or [])),
    ])


OPERATIONS = [
    list_operation(
        "timeweb_list_apps",
        "List all PaaS applications in the account",
        "/api/v1/apps",
        key="apps",
        title="PaaS Applications",
        render_item=format_app,
        empty="No applications found.",
    ),
    Operation(
        "timeweb_get_app",
        "Get detailed information about a specific PaaS application",
        AppIdArgs,
        "GET",
        "/api/v1/apps/{app_id}",
        render=render_app,
        structured=unwrap("app"),
    ),
    create_operation(
        "timeweb_create_app",
        "Create a new PaaS application from GitHub repository",
        "/api/v1/apps",
        key="app",
        heading="Application Created Successfully",
        render_item=format_app,
        args=CreateAppArgs,
        body=app_body,
    ),
    update_operation(
        "timeweb_update_app",
        "Update a PaaS application settings",
        "/api/v1/apps/{app_id}",
        key="app",
        heading="Application Updated Successfully",
        render_item=format_app,
        args=UpdateAppArgs,
        body=app_body,
    ),
    delete_operation(
        "timeweb_delete_app",
        "Delete a PaaS application permanently",
        "/api/v1/apps/{app_id}",
        args=AppIdArgs,
        message="Application {app_id} has been deleted successfully.",
        result={"deleted_app_id": "app_id"},
    ),
    action_operation(
        "timeweb_app_action",
        "Perform an action on a PaaS application (start, stop, restart)",
        "/api/v1/apps/{app_id}/action/{action}",
        args=AppActionArgs,
        message="Action **{action}** initiated on application {app_id}.",
        result={"app_id": "app_id", "action": "action"},
    ),
    logs_operation(
        "timeweb_get_app_logs",
        "Get logs from a PaaS application",
        "/api/v1/apps/{app_id}/logs",
        AppIdArgs,
        title="Application Logs (App {app_id})",
        empty="No logs available for application {app_id}.",
        context=("app_id",),
    ),
    Operation(
        "timeweb_get_app_statistics",
        "Get resource usage statistics for a PaaS application",
        AppIdArgs,
        "GET",
        "/api/v1/apps/{app_id}/statistics",
        render=render_statistics,
        structured=statistics_structured,
    ),
    create_operation(
        "timeweb_deploy_app",
        "Trigger a new deployment for a PaaS application",
        "/api/v1/apps/{app_id}/deploy",
        key="deploy",
        heading="Deployment Started",
        render_item=format_deploy,
        args=DeployAppArgs,
        footer="*Use timeweb_list_app_deploys to check progress.*",
    ),
    list_operation(
        "timeweb_list_app_deploys",
        "List deployment history for a PaaS application",
        "/api/v1/apps/{app_id}/deploys",
        key="deploys",
        title="Deployment History (App {app_id})",
        render_item=format_deploy,
        empty="No deployments found for application {app_id}.",
        args=DeployListArgs,
        context=("app_id",),
        separator="\n",
    ),
    logs_operation(
        "timeweb_get_deploy_logs",
        "Get logs for a specific deployment",
        "/api/v1/apps/{app_id}/deploy/{deploy_id}/logs",
        DeployIdArgs,
        title="Deployment Logs (Deploy {deploy_id})",
        empty="No logs available for deployment {deploy_id}.",
        context=("app_id", "deploy_id"),
    ),
    action_operation(
        "timeweb_stop_deploy",
        "Stop a running deployment",
        "/api/v1/apps/{app_id}/deploy/{deploy_id}/stop",
        args=DeployIdArgs,
        message="Deployment {deploy_id} has been stopped.",
        result={"app_id": "app_id", "deploy_id": "deploy_id"},
        extra={"action": "stopped"},
    ),
]
