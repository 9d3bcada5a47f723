from __future__ import annotations

from typing import Any, Dict

from openshift_mcp.core.adapters import CapabilityKind, EnvironmentVariableCapability
from openshift_mcp.core.resources import OpenShiftConnection
from openshift_mcp.core.tools._resolve import _application, _service, _unsupported


async def list_environment_variables(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    """
    List an application's environment variables. Listing only needs the
    list link, so read-only applications are listed too.
    Returns {application, supported, items: {NAME: value}}.
    """
    app = await _application(connection, domain, name)
    variables = await app.get_environment_variables()
    return {
        "application": app.name,
        "supported": not variables.unsupported,
        "items": {v.name: v.value for v in variables},
    }


async def set_environment_variable(
    connection: OpenShiftConnection,
    domain: str,
    name: str,
    variable: str,
    value: str,
) -> Dict[str, Any]:
    """Add the variable, or update it when it already exists."""
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.ENVIRONMENT_VARIABLES)
    if not isinstance(capability, EnvironmentVariableCapability):
        return _unsupported(service, "environment variable management")

    existed = await service.application.has_environment_variable(variable)
    if existed:
        await capability.update_environment_variable(variable, value)
    else:
        await capability.add_environment_variable(variable, value)
    return {
        "application": service.name,
        "supported": True,
        "variable": variable,
        "created": not existed,
    }


async def remove_environment_variable(
    connection: OpenShiftConnection, domain: str, name: str, variable: str
) -> Dict[str, Any]:
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.ENVIRONMENT_VARIABLES)
    if not isinstance(capability, EnvironmentVariableCapability):
        return _unsupported(service, "environment variable management")

    await capability.remove_environment_variable(variable)
    return {"application": service.name, "supported": True, "removed": variable}
