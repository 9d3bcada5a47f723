from __future__ import annotations

from typing import Any, Dict

from openshift_mcp.core.adapters import AliasCapability, CapabilityKind
from openshift_mcp.core.resources import OpenShiftConnection
from openshift_mcp.core.tools._resolve import _application, _service, _unsupported


async def list_aliases(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    app = await _application(connection, domain, name)
    aliases = await app.get_aliases()
    return {
        "application": app.name,
        "supported": not aliases.unsupported,
        "items": [
            {"name": a.name, "has_private_ssl_certificate": a.has_private_ssl_certificate}
            for a in aliases
        ],
    }


async def add_alias(
    connection: OpenShiftConnection, domain: str, name: str, alias: str
) -> Dict[str, Any]:
    """Map an additional host name (e.g. 'www.example.com') to the application."""
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.ALIASES)
    if not isinstance(capability, AliasCapability):
        return _unsupported(service, "aliases")

    await capability.add_alias(alias)
    return {"application": service.name, "supported": True, "added": alias}


async def remove_alias(
    connection: OpenShiftConnection, domain: str, name: str, alias: str
) -> Dict[str, Any]:
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.ALIASES)
    if not isinstance(capability, AliasCapability):
        return _unsupported(service, "aliases")

    await capability.remove_alias(alias)
    return {"application": service.name, "supported": True, "removed": alias}
