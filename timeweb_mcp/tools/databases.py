"""Tools: managed database clusters, presets and backups."""

from __future__ import annotations

from typing import Literal, TypedDict

from pydantic import Field

from timeweb_mcp.shared.dispatch import (
    Operation,
    acknowledged_operation,
    collection_operation,
    create_operation,
    delete_operation,
    get_operation,
    list_operation,
    unwrap,
    update_operation,
)
from timeweb_mcp.shared.formatting import (
    bullet,
    format_bytes,
    format_date,
    format_megabytes,
    section,
    value_or,
    yes_no,
)
from timeweb_mcp.shared.schemas import (
    FormattedArgs,
    Location,
    PaginatedArgs,
    id_field,
    location_field,
)

DatabaseType = Literal["mysql", "mysql5", "postgres", "redis", "mongodb", "clickhouse"]


class DatabaseDescriptor(TypedDict, total=False):
    id: int
    name: str
    type: str
    status: str
    location: str
    host: str
    port: int
    admin: dict
    created_at: str


class BackupDescriptor(TypedDict, total=False):
    id: int
    name: str
    comment: str
    size: int
    status: str
    type: str
    created_at: str


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

class DatabaseIdArgs(FormattedArgs):
    db_id: int = id_field("Database cluster ID")


class CreateDatabaseArgs(FormattedArgs):
    name: str = Field(..., min_length=1, description="Database name")
    type: DatabaseType = Field(..., description="Database type")
    preset_id: int = id_field("Database preset ID")
    login: str | None = Field(None, description="Admin login (default: admin)")
    password: str | None = Field(None, description="Admin password (auto-generated if not provided)")
    hash_type: Literal["caching_sha2", "mysql_native"] | None = Field(
        None, description="MySQL password hash type"
    )
    location: Location | None = location_field("Database location")


class BackupListArgs(PaginatedArgs):
    db_id: int = id_field("Database cluster ID")


class CreateBackupArgs(DatabaseIdArgs):
    comment: str | None = Field(None, max_length=255, description="Backup comment")


class BackupIdArgs(DatabaseIdArgs):
    backup_id: int = id_field("Backup ID")


class UpdateAutoBackupsArgs(DatabaseIdArgs):
    is_enabled: bool | None = Field(None, description="Enable or disable automatic backups")
    copy_count: int | None = Field(None, ge=1, le=99, description="Number of backup copies to keep")
    interval: Literal["day", "week", "month"] | None = Field(None, description="Backup interval")
    day_of_week: int | None = Field(
        None, ge=1, le=7, description="Day of week for weekly backups (1 = Monday, 7 = Sunday)"
    )
    start_at: str | None = Field(None, description="Date to start creating backups, ISO format")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_database(db: DatabaseDescriptor) -> str:
    admin = db.get("admin") or {}
    return section(f"{value_or(db.get('name'))} (ID: {value_or(db.get('id'))})", [
        bullet("Type", value_or(db.get("type"))),
        bullet("Status", value_or(db.get("status"))),
        bullet("Location", value_or(db.get("location"))),
        bullet("Host", value_or(db.get("host"))),
        bullet("Port", value_or(db.get("port"))),
        bullet("Admin Login", value_or(admin.get("login"))),
        bullet("Created", format_date(db.get("created_at"))),
    ])


def format_database_preset(preset: dict) -> str:
    return section(f"{preset.get('description') or 'Preset'} (ID: {value_or(preset.get('id'))})", [
        bullet("Type", value_or(preset.get("type"))),
        bullet("CPU", f"{value_or(preset.get('cpu'))} cores"),
        bullet("RAM", format_megabytes(preset.get("ram"))),
        bullet("Disk", format_megabytes(preset.get("disk"))),
        bullet("Price", f"{value_or(preset.get('price'))} {preset.get('currency') or ''}/month"),
        bullet("Location", value_or(preset.get("location"))),
    ])


def format_backup(backup: BackupDescriptor) -> str:
    return section(f"Backup {value_or(backup.get('id'))}", [
        bullet("Name", value_or(backup.get("name"))),
        bullet("Status", value_or(backup.get("status"))),
        bullet("Type", value_or(backup.get("type"))),
        bullet("Size", format_bytes(backup.get("size"))),
        bullet("Comment", value_or(backup.get("comment"), "None")),
        bullet("Created", format_date(backup.get("created_at"))),
    ])


def format_auto_backups(settings: dict) -> str:
    return "\n".join([
        bullet("Enabled", yes_no(settings.get("is_enabled"))),
        bullet("Copies Kept", value_or(settings.get("copy_count"))),
        bullet("Interval", value_or(settings.get("interval"))),
        bullet("Day of Week", value_or(settings.get("day_of_week"))),
        bullet("Start At", value_or(settings.get("start_at"))),
    ])


def render_auto_backups(payload, args) -> str:
    settings = payload.get("auto_backups_settings") or {}
    return f"# Automatic Backups\n\n{format_auto_backups(settings)}"


OPERATIONS = [
    list_operation(
        "timeweb_list_databases",
        "List all database clusters in the account",
        "/api/v1/dbs",
        key="dbs",
        json_key="databases",
        title="Database Clusters",
        render_item=format_database,
        empty="No databases found.",
    ),
    get_operation(
        "timeweb_get_database",
        "Get detailed information about a specific database cluster",
        "/api/v1/dbs/{db_id}",
        key="db",
        render_item=format_database,
        args=DatabaseIdArgs,
    ),
    create_operation(
        "timeweb_create_database",
        "Create a new managed database cluster",
        "/api/v1/dbs",
        key="db",
        heading="Database Created Successfully",
        render_item=format_database,
        args=CreateDatabaseArgs,
    ),
    delete_operation(
        "timeweb_delete_database",
        "Delete a database cluster permanently",
        "/api/v1/dbs/{db_id}",
        args=DatabaseIdArgs,
        message="Database cluster {db_id} has been deleted successfully.",
        result={"deleted_db_id": "db_id"},
    ),
    collection_operation(
        "timeweb_list_database_presets",
        "List available database configuration presets",
        "/api/v1/presets/dbs",
        key="databases_presets",
        title="Database Presets",
        render_item=format_database_preset,
        empty="No database presets found.",
    ),
    list_operation(
        "timeweb_list_database_backups",
        "List backups of a database cluster",
        "/api/v1/dbs/{db_id}/backups",
        key="backups",
        title="Backups of Database {db_id}",
        render_item=format_backup,
        empty="No backups found for database {db_id}.",
        args=BackupListArgs,
        context=("db_id",),
    ),
    create_operation(
        "timeweb_create_database_backup",
        "Create a backup of a database cluster",
        "/api/v1/dbs/{db_id}/backups",
        key="backup",
        heading="Backup Created Successfully",
        render_item=format_backup,
        args=CreateBackupArgs,
    ),
    delete_operation(
        "timeweb_delete_database_backup",
        "Delete a database backup",
        "/api/v1/dbs/{db_id}/backups/{backup_id}",
        args=BackupIdArgs,
        message="Backup {backup_id} of database {db_id} has been deleted successfully.",
        result={"deleted_backup_id": "backup_id", "db_id": "db_id"},
    ),
    acknowledged_operation(
        "timeweb_restore_database_backup",
        "Restore a database cluster from a backup",
        "PUT",
        "/api/v1/dbs/{db_id}/backups/{backup_id}",
        args=BackupIdArgs,
        message="Restore of database {db_id} from backup {backup_id} initiated successfully.",
        result={"restored_backup_id": "backup_id", "db_id": "db_id"},
    ),
    Operation(
        "timeweb_get_database_auto_backups",
        "Get automatic backup settings of a database cluster",
        DatabaseIdArgs,
        "GET",
        "/api/v1/dbs/{db_id}/auto-backups",
        render=render_auto_backups,
        structured=unwrap("auto_backups_settings"),
    ),
    update_operation(
        "timeweb_update_database_auto_backups",
        "Change automatic backup settings of a database cluster",
        "/api/v1/dbs/{db_id}/auto-backups",
        key="auto_backups_settings",
        heading="Automatic Backups Updated Successfully",
        render_item=format_auto_backups,
        args=UpdateAutoBackupsArgs,
    ),
]
