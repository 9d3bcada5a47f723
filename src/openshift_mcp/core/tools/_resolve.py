"""
Shared lookups for tools: domain/application by name, and summaries.
"""

from typing import Any, Dict

from openshift_mcp.core.adapters import ApplicationService, adapt
from openshift_mcp.core.errors import NotFoundError
from openshift_mcp.core.resources import Application, Domain, OpenShiftConnection


async def _domain(connection: OpenShiftConnection, domain: str) -> Domain:
    found = await connection.get_domain(domain)
    if found is None:
        raise NotFoundError(Domain.kind, domain)
    return found


async def _application(
    connection: OpenShiftConnection, domain: str, name: str
) -> Application:
    found = await (await _domain(connection, domain)).get_application_by_name(name)
    if found is None:
        raise NotFoundError(Application.kind, f"{domain}/{name}")
    return found


async def _service(
    connection: OpenShiftConnection, domain: str, name: str
) -> ApplicationService:
    return adapt(await _application(connection, domain, name))


def _unsupported(service: ApplicationService, capability: str) -> Dict[str, Any]:
    return {
        "application": service.name,
        "supported": False,
        "message": f"Application '{service.name}' does not offer {capability}.",
    }


def _application_summary(app: Application) -> Dict[str, Any]:
    return {
        "name": app.name,
        "uuid": app.uuid,
        "framework": app.framework,
        "url": app.application_url,
        "git_url": app.git_url,
        "ssh_url": app.ssh_url,
        "gear_profile": app.gear_profile,
        "scalable": app.scalable,
        "deployment_type": app.deployment_type,
        "created": app.creation_time.isoformat() if app.creation_time else None,
    }
