"""Pages project and deployment tools."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult, Tool

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.tools._shared import (
    FORMAT_PROPERTY,
    ToolHandler,
    object_schema,
    response_format,
    string_property,
    unpaginated,
)
from cloudflare_mcp.services import pages_service
from cloudflare_mcp.utils.formatters import format_response, format_success

ACCOUNT_ID = string_property("Account ID")
PROJECT_NAME = string_property("Project name")
DEPLOYMENT_ID = string_property("Deployment ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_pages_projects",
        description="List Pages projects in an account.",
        inputSchema=object_schema({"account_id": ACCOUNT_ID, "format": FORMAT_PROPERTY}, ["account_id"]),
    ),
    Tool(
        name="cloudflare_get_pages_project",
        description="Get details of a Pages project, including domains and build configuration.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "project_name": PROJECT_NAME, "format": FORMAT_PROPERTY},
            ["account_id", "project_name"],
        ),
    ),
    Tool(
        name="cloudflare_create_pages_project",
        description="Create a Pages project served at <name>.pages.dev.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "name": PROJECT_NAME,
                "production_branch": string_property(
                    "Production branch name", default=pages_service.DEFAULT_PRODUCTION_BRANCH
                ),
            },
            ["account_id", "name"],
        ),
    ),
    Tool(
        name="cloudflare_delete_pages_project",
        description="Delete a Pages project and all of its deployments.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "project_name": PROJECT_NAME},
            ["account_id", "project_name"],
        ),
    ),
    Tool(
        name="cloudflare_list_pages_deployments",
        description="List deployments of a Pages project.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "project_name": PROJECT_NAME, "format": FORMAT_PROPERTY},
            ["account_id", "project_name"],
        ),
    ),
    Tool(
        name="cloudflare_get_pages_deployment",
        description="Get details of a Pages deployment, including build stages.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "project_name": PROJECT_NAME,
                "deployment_id": DEPLOYMENT_ID,
                "format": FORMAT_PROPERTY,
            },
            ["account_id", "project_name", "deployment_id"],
        ),
    ),
    Tool(
        name="cloudflare_delete_pages_deployment",
        description="Delete a Pages deployment.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "project_name": PROJECT_NAME, "deployment_id": DEPLOYMENT_ID},
            ["account_id", "project_name", "deployment_id"],
        ),
    ),
    Tool(
        name="cloudflare_rollback_pages_deployment",
        description="Roll the production environment back to an earlier deployment.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "project_name": PROJECT_NAME,
                "deployment_id": string_property("Deployment ID to rollback to"),
            },
            ["account_id", "project_name", "deployment_id"],
        ),
    ),
]


async def handle_list_pages_projects(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    projects = await pages_service.list_pages_projects(client, arguments["account_id"])
    return format_response(unpaginated(projects), response_format(arguments), "pages_projects")


async def handle_get_pages_project(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    project = await pages_service.get_pages_project(client, arguments["account_id"], arguments["project_name"])
    return format_response(project, response_format(arguments), "pages_project")


async def handle_create_pages_project(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    name = arguments["name"]
    project = await pages_service.create_pages_project(
        client, arguments["account_id"], name, arguments.get("production_branch")
    )
    return format_success(
        f'Pages project "{name}" created',
        url=f"https://{(project or {}).get('subdomain')}.pages.dev",
        project=project,
    )


async def handle_delete_pages_project(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    project_name = arguments["project_name"]
    await pages_service.delete_pages_project(client, arguments["account_id"], project_name)
    return format_success(f'Pages project "{project_name}" deleted')


async def handle_list_pages_deployments(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    deployments = await pages_service.list_pages_deployments(
        client, arguments["account_id"], arguments["project_name"]
    )
    return format_response(unpaginated(deployments), response_format(arguments), "deployments")


async def handle_get_pages_deployment(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    deployment = await pages_service.get_pages_deployment(
        client, arguments["account_id"], arguments["project_name"], arguments["deployment_id"]
    )
    return format_response(deployment, response_format(arguments), "deployment")


async def handle_delete_pages_deployment(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    deployment_id = arguments["deployment_id"]
    await pages_service.delete_pages_deployment(
        client, arguments["account_id"], arguments["project_name"], deployment_id
    )
    return format_success(f"Deployment {deployment_id} deleted")


async def handle_rollback_pages_deployment(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    deployment_id = arguments["deployment_id"]
    deployment = await pages_service.rollback_pages_deployment(
        client, arguments["account_id"], arguments["project_name"], deployment_id
    )
    return format_success(f"Rolled back to deployment {deployment_id}", deployment=deployment)


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_pages_projects": handle_list_pages_projects,
    "cloudflare_get_pages_project": handle_get_pages_project,
    "cloudflare_create_pages_project": handle_create_pages_project,
    "cloudflare_delete_pages_project": handle_delete_pages_project,
    "cloudflare_list_pages_deployments": handle_list_pages_deployments,
    "cloudflare_get_pages_deployment": handle_get_pages_deployment,
    "cloudflare_delete_pages_deployment": handle_delete_pages_deployment,
    "cloudflare_rollback_pages_deployment": handle_rollback_pages_deployment,
}
