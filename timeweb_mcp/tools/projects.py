"""Tools: projects for grouping resources."""

from __future__ import annotations

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
)
from timeweb_mcp.shared.formatting import bullet, section, value_or, yes_no
from timeweb_mcp.shared.schemas import FormattedArgs, id_field


class ProjectIdArgs(FormattedArgs):
    project_id: int = id_field("Project ID")


class CreateProjectArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Project name")
    description: str | None = Field(None, description="Project description")
    avatar_id: str | None = Field(None, description="Avatar image ID")


def format_project(project: dict) -> str:
    return section(f"{value_or(project.get('name'))} (ID: {value_or(project.get('id'))})", [
        bullet("Description", value_or(project.get("description"), "None")),
        bullet("Avatar ID", value_or(project.get("avatar_id"), "Default")),
        bullet("Default", yes_no(project.get("is_default"))),
    ])


OPERATIONS = [
    list_operation(
        "timeweb_list_projects",
        "List all projects in the account for organizing resources",
        "/api/v1/projects",
        key="projects",
        title="Projects",
        render_item=format_project,
        empty="No projects found.",
    ),
    get_operation(
        "timeweb_get_project",
        "Get detailed information about a specific project",
        "/api/v1/projects/{project_id}",
        key="project",
        render_item=format_project,
        args=ProjectIdArgs,
    ),
    create_operation(
        "timeweb_create_project",
        "Create a new project for organizing resources",
        "/api/v1/projects",
        key="project",
        heading="Project Created Successfully",
        render_item=format_project,
        args=CreateProjectArgs,
    ),
    delete_operation(
        "timeweb_delete_project",
        "Delete a project (resources must be moved or deleted first)",
        "/api/v1/projects/{project_id}",
        args=ProjectIdArgs,
        message="Project {project_id} has been deleted successfully.",
        result={"deleted_project_id": "project_id"},
    ),
]
