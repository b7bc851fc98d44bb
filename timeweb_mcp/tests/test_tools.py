"""Per-domain request shapes and rendering for the tool catalogue."""

import json

import pytest

from timeweb_mcp.server import build_registry


@pytest.fixture(scope="module")
def registry():
    return build_registry()


async def call(registry, client, name, arguments):
    return await registry.dispatch(client, name, arguments)


# ── account ──────────────────────────────────────────────────────────

class TestAccount:
    @pytest.mark.asyncio
    async def test_finances_render_currency(self, registry, fake_client):
        client = fake_client({"finances": {"balance": 1500.5, "currency": "RUB", "hours_left": 120}})

        text = await call(registry, client, "timeweb_get_finances", {})

        assert text.startswith("# Account Finances")
        assert "₽" in text
        assert "**Hours Left:** 120" in text
        assert "**Hourly Cost:** N/A" in text

    @pytest.mark.asyncio
    async def test_status_json_unwrapped(self, registry, fake_client):
        status = {"is_email_verified": True, "company_info": {"name": "ACME"}}
        client = fake_client({"status": status})

        text = await call(registry, client, "timeweb_get_account_status", {"format": "json"})

        assert json.loads(text) == status


# ── servers ──────────────────────────────────────────────────────────

class TestServers:
    @pytest.mark.asyncio
    async def test_action_path_and_ack(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_server_action", {"server_id": 3, "action": "reboot"})

        assert text == "Action **reboot** initiated successfully on server 3."
        assert client.calls[0]["method"] == "POST"
        assert client.calls[0]["path"] == "/api/v1/servers/3/reboot"

    @pytest.mark.asyncio
    async def test_unknown_action_rejected(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_server_action", {"server_id": 3, "action": "explode"})

        assert text.startswith("Error: Invalid argument 'action'")
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_logs_default_query(self, registry, fake_client):
        logs = [{"logged_at": "2024-01-15T10:30:00Z", "message": "booted"}]
        client = fake_client({"server_logs": logs})

        text = await call(registry, client, "timeweb_get_server_logs", {"server_id": 8})
        data = json.loads(await call(registry, client, "timeweb_get_server_logs", {"server_id": 8, "format": "json"}))

        assert client.calls[0]["params"] == {"limit": 100, "order": "desc"}
        assert "**Total entries:** 1" in text
        assert "booted" in text
        assert data == {"logs": logs, "server_id": 8, "count": 1}

    @pytest.mark.asyncio
    async def test_statistics_averages(self, registry, fake_client):
        stats = {
            "cpu": [{"percent": 10}, {"percent": 20}],
            "ram": [{"percent": 50, "used": 1024, "total": 2048}],
            "disk": [],
        }
        client = fake_client({"server_statistics": stats})

        text = await call(
            registry, client, "timeweb_get_server_statistics",
            {"server_id": 8, "date_from": "2024-01-01T00:00:00Z"},
        )

        assert client.calls[0]["params"] == {"date_from": "2024-01-01T00:00:00Z"}
        assert "**Average CPU Usage:** 15.0%" in text
        assert "**Average RAM Usage:** 50.0% (1 GB / 2 GB)" in text
        assert "**Average Disk Usage:** N/A" in text

    @pytest.mark.asyncio
    async def test_statistics_without_dates_sends_no_query(self, registry, fake_client):
        client = fake_client({"server_statistics": {}})

        await call(registry, client, "timeweb_get_server_statistics", {"server_id": 8})

        assert client.calls[0]["params"] is None

    @pytest.mark.asyncio
    async def test_os_list_is_bare_json_array(self, registry, fake_client):
        images = [{"id": 1, "name": "ubuntu", "version": "22.04"}]
        client = fake_client({"os": images})

        data = json.loads(await call(registry, client, "timeweb_list_os", {"format": "json"}))
        text = await call(registry, client, "timeweb_list_os", {})

        assert data == images
        assert text == "# Available Operating Systems\n\n- **ubuntu** (ID: 1) - 22.04"


# ── disks ────────────────────────────────────────────────────────────

class TestDisks:
    @pytest.mark.asyncio
    async def test_list_summary_and_context(self, registry, fake_client):
        disks = [{"id": 1, "size": 10240, "used": 5120, "system_name": "vda"}]
        client = fake_client({"server_disks": disks})

        text = await call(registry, client, "timeweb_list_server_disks", {"server_id": 4})
        data = json.loads(await call(registry, client, "timeweb_list_server_disks", {"server_id": 4, "format": "json"}))

        assert "**Total:** 1 disks | 5 GB / 10 GB used" in text
        assert "**Used:** 5 GB (50%)" in text
        assert data == {"disks": disks, "server_id": 4}

    @pytest.mark.asyncio
    async def test_minimum_size(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_create_server_disk", {"server_id": 4, "size": 1024})

        assert text.startswith("Error: Invalid argument 'size'")
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_resize_uses_patch(self, registry, fake_client):
        client = fake_client({"server_disk": {"id": 2, "size": 20480}})

        await call(registry, client, "timeweb_update_server_disk", {"server_id": 4, "disk_id": 2, "size": 20480})

        assert client.calls[0]["method"] == "PATCH"
        assert client.calls[0]["path"] == "/api/v1/servers/4/disks/2"
        assert client.calls[0]["json"] == {"size": 20480}


# ── databases ────────────────────────────────────────────────────────

class TestDatabases:
    @pytest.mark.asyncio
    async def test_list_json_key(self, registry, fake_client):
        client = fake_client({"dbs": [{"id": 1}], "meta": {"total": 1}})

        data = json.loads(await call(registry, client, "timeweb_list_databases", {"format": "json"}))

        assert data == {"databases": [{"id": 1}], "total": 1, "limit": 50, "offset": 0}

    @pytest.mark.asyncio
    async def test_restore_uses_put(self, registry, fake_client):
        client = fake_client({})

        data = json.loads(await call(
            registry, client, "timeweb_restore_database_backup", {"db_id": 2, "backup_id": 9, "format": "json"},
        ))

        assert client.calls[0]["method"] == "PUT"
        assert client.calls[0]["path"] == "/api/v1/dbs/2/backups/9"
        assert data == {"success": True, "restored_backup_id": 9, "db_id": 2}

    @pytest.mark.asyncio
    async def test_backups_list_context(self, registry, fake_client):
        client = fake_client({"backups": [], "meta": {"total": 0}})

        text = await call(registry, client, "timeweb_list_database_backups", {"db_id": 2})
        data = json.loads(await call(registry, client, "timeweb_list_database_backups", {"db_id": 2, "format": "json"}))

        assert text == "No backups found for database 2."
        assert data["db_id"] == 2
        assert data["backups"] == []

    @pytest.mark.asyncio
    async def test_auto_backups(self, registry, fake_client):
        settings = {"is_enabled": True, "copy_count": 3, "interval": "day"}
        client = fake_client({"auto_backups_settings": settings})

        text = await call(registry, client, "timeweb_get_database_auto_backups", {"db_id": 2})
        updated = await call(
            registry, client, "timeweb_update_database_auto_backups", {"db_id": 2, "copy_count": 3},
        )

        assert text.startswith("# Automatic Backups\n\n- **Enabled:** Yes")
        assert updated.startswith("# Automatic Backups Updated Successfully")
        assert client.calls[1]["json"] == {"copy_count": 3}


# ── kubernetes ───────────────────────────────────────────────────────

class TestKubernetes:
    @pytest.mark.asyncio
    async def test_kubeconfig_yaml_block(self, registry, fake_client):
        client = fake_client({"config": "apiVersion: v1"})

        text = await call(registry, client, "timeweb_get_kubeconfig", {"cluster_id": 6})

        assert text == "# Kubeconfig for Cluster 6\n\n```yaml\napiVersion: v1\n```"

    @pytest.mark.asyncio
    async def test_create_with_worker_groups(self, registry, fake_client):
        client = fake_client({"cluster": {"id": 6, "name": "k"}})

        await call(registry, client, "timeweb_create_k8s_cluster", {
            "name": "k",
            "preset_id": 1,
            "worker_groups": [{"name": "pool", "preset_id": 2, "node_count": 3}],
        })

        assert client.calls[0]["json"] == {
            "name": "k",
            "preset_id": 1,
            "worker_groups": [{"name": "pool", "preset_id": 2, "node_count": 3}],
        }


# ── domains ──────────────────────────────────────────────────────────

class TestDomains:
    @pytest.mark.asyncio
    async def test_availability(self, registry, fake_client):
        client = fake_client({"is_domain_available": False, "suggestions": ["example.net"]})

        text = await call(registry, client, "timeweb_check_domain", {"fqdn": "example.com"})

        assert client.calls[0]["path"] == "/api/v1/check-domain/example.com"
        assert "**Available:** No ✗" in text
        assert "- example.net" in text

    @pytest.mark.asyncio
    async def test_dns_record_body_excludes_path_field(self, registry, fake_client):
        client = fake_client({"dns_record": {"id": 1, "type": "A", "value": "1.2.3.4"}})

        text = await call(registry, client, "timeweb_create_dns_record", {
            "fqdn": "example.com", "type": "A", "value": "1.2.3.4", "subdomain": "www",
        })

        assert client.calls[0]["path"] == "/api/v1/domains/example.com/dns-records"
        assert client.calls[0]["json"] == {"type": "A", "value": "1.2.3.4", "subdomain": "www"}
        assert text == "# DNS Record Created\n\n- **A** @ → 1.2.3.4 (TTL: default)"

    @pytest.mark.asyncio
    async def test_records_json_key(self, registry, fake_client):
        client = fake_client({"dns_records": [{"id": 1}]})

        data = json.loads(await call(registry, client, "timeweb_list_dns_records", {"fqdn": "a.ru", "format": "json"}))

        assert data["records"] == [{"id": 1}]


# ── ssh keys and floating IPs ────────────────────────────────────────

class TestAttachments:
    @pytest.mark.asyncio
    async def test_add_key_to_server_body(self, registry, fake_client):
        client = fake_client({})

        await call(registry, client, "timeweb_add_ssh_key_to_server", {"server_id": 2, "ssh_key_id": 5})

        assert client.calls[0]["path"] == "/api/v1/servers/2/ssh-keys"
        assert client.calls[0]["json"] == {"ssh_key_id": 5}

    @pytest.mark.asyncio
    async def test_bind_floating_ip_body(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_bind_floating_ip", {
            "floating_ip_id": "fip-1", "resource_type": "server", "resource_id": 77,
        })

        assert client.calls[0]["path"] == "/api/v1/floating-ips/fip-1/bind"
        assert client.calls[0]["json"] == {"resource_type": "server", "resource_id": 77}
        assert text == "Floating IP fip-1 has been bound to server 77 successfully."

    @pytest.mark.asyncio
    async def test_empty_string_id_rejected(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_get_floating_ip", {"floating_ip_id": ""})

        assert text.startswith("Error: Invalid argument 'floating_ip_id'")
        assert client.calls == []


# ── networking ───────────────────────────────────────────────────────

class TestNetworking:
    @pytest.mark.asyncio
    async def test_vpc_services_summary(self, registry, fake_client):
        services = [{"id": 1, "name": "db", "type": "dbaas", "status": "on", "ip": "10.0.0.2"}]
        client = fake_client({"services": services})

        text = await call(registry, client, "timeweb_list_vpc_services", {"vpc_id": "network-1"})

        assert client.calls[0]["path"] == "/api/v2/vpcs/network-1/services"
        assert text.startswith("# VPC Services (VPC network-1)\n\n**Total:** 1 services\n\n- **db**")

    @pytest.mark.asyncio
    async def test_balancer_rules_section(self, registry, fake_client):
        balancer = {"id": 3, "name": "lb", "rules": [
            {"id": 1, "balancer_proto": "http", "balancer_port": 80, "server_proto": "http", "server_port": 8080},
        ]}
        client = fake_client({"balancer": balancer})

        text = await call(registry, client, "timeweb_get_balancer", {"balancer_id": 3})

        assert "### Rules\n- **Rule 1:** HTTP:80 → HTTP:8080" in text

    @pytest.mark.asyncio
    async def test_balancer_rule_protocol_enum(self, registry, fake_client):
        client = fake_client({})

        text = await call(registry, client, "timeweb_create_balancer_rule", {
            "balancer_id": 3, "balancer_proto": "ftp", "balancer_port": 21,
            "server_proto": "tcp", "server_port": 21,
        })

        assert text.startswith("Error: Invalid argument 'balancer_proto'")

    @pytest.mark.asyncio
    async def test_firewall_rules_context(self, registry, fake_client):
        rules = [{"id": 1, "direction": "ingress", "protocol": "tcp", "port": "22", "cidr": "0.0.0.0/0"}]
        client = fake_client({"rules": rules, "meta": {"total": 1}})

        text = await call(registry, client, "timeweb_list_firewall_rules", {"group_id": 4})
        data = json.loads(await call(registry, client, "timeweb_list_firewall_rules", {"group_id": 4, "format": "json"}))

        assert "- **Rule 1:** INGRESS | TCP | Port: 22 | CIDR: 0.0.0.0/0" in text
        assert data["group_id"] == 4
        assert data["total"] == 1


# ── apps ─────────────────────────────────────────────────────────────

class TestApps:
    @pytest.mark.asyncio
    async def test_create_renames_commands_and_envs(self, registry, fake_client):
        client = fake_client({"app": {"id": 1, "name": "site"}})

        await call(registry, client, "timeweb_create_app", {
            "name": "site",
            "type": "nodejs",
            "preset_id": 2,
            "repository_id": 3,
            "build_command": "npm run build",
            "run_command": "npm start",
            "envs": {"NODE_ENV": "production"},
        })

        assert client.calls[0]["json"] == {
            "name": "site",
            "type": "nodejs",
            "preset_id": 2,
            "repository_id": 3,
            "build_cmd": "npm run build",
            "run_cmd": "npm start",
            "envs": [{"key": "NODE_ENV", "value": "production"}],
        }

    @pytest.mark.asyncio
    async def test_update_sends_only_supplied(self, registry, fake_client):
        client = fake_client({"app": {"id": 1}})

        await call(registry, client, "timeweb_update_app", {"app_id": 1, "branch": "dev"})

        assert client.calls[0]["method"] == "PATCH"
        assert client.calls[0]["json"] == {"branch": "dev"}

    @pytest.mark.asyncio
    async def test_env_values_hidden(self, registry, fake_client):
        app = {"id": 1, "name": "site", "envs": [{"key": "SECRET", "value": "hunter2"}]}
        client = fake_client({"app": app})

        text = await call(registry, client, "timeweb_get_app", {"app_id": 1})

        assert "`SECRET`" in text
        assert "hunter2" not in text

    @pytest.mark.asyncio
    async def test_stop_deploy_ack(self, registry, fake_client):
        client = fake_client({})

        data = json.loads(await call(
            registry, client, "timeweb_stop_deploy", {"app_id": 1, "deploy_id": 2, "format": "json"},
        ))

        assert client.calls[0]["path"] == "/api/v1/apps/1/deploy/2/stop"
        assert data == {"success": True, "app_id": 1, "deploy_id": 2, "action": "stopped"}

    @pytest.mark.asyncio
    async def test_empty_logs(self, registry, fake_client):
        client = fake_client({"logs": ""})

        text = await call(registry, client, "timeweb_get_app_logs", {"app_id": 5})

        assert text == "No logs available for application 5."


# ── images ───────────────────────────────────────────────────────────

class TestImages:
    @pytest.mark.asyncio
    async def test_create_footer(self, registry, fake_client):
        client = fake_client({"image": {"id": "img-1", "name": "golden", "status": "new", "progress": 10}})

        text = await call(registry, client, "timeweb_create_image", {"disk_id": 3, "name": "golden"})

        assert text.startswith("# Image Creation Started\n\n## golden (ID: img-1)")
        assert "**Status:** new (10%)" in text
        assert text.endswith("Check status with timeweb_get_image.*")
