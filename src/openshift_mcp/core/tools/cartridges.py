from __future__ import annotations

from typing import Any, Dict, Optional

from openshift_mcp.core.adapters import CapabilityKind, CartridgeCapability
from openshift_mcp.core.resources import OpenShiftConnection
from openshift_mcp.core.tools._resolve import _application, _service, _unsupported


async def list_cartridges(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    """List cartridges embedded into an application."""
    app = await _application(connection, domain, name)
    cartridges = await app.get_embedded_cartridges()
    return {
        "application": app.name,
        "supported": not cartridges.unsupported,
        "items": [
            {
                "name": c.name,
                "display_name": c.display_name,
                "description": c.description,
                "url": c.url,
            }
            for c in cartridges
        ],
    }


async def add_cartridge(
    connection: OpenShiftConnection,
    domain: str,
    name: str,
    *,
    cartridge: Optional[str] = None,
    url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Embed a cartridge by name (e.g. 'mysql-5.1') or a downloadable cartridge
    by url. Returns the broker's messages for the new cartridge.
    """
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.CARTRIDGES)
    if not isinstance(capability, CartridgeCapability):
        return _unsupported(service, "cartridge management")

    added = await capability.add_cartridge(cartridge, url=url)
    return {
        "application": service.name,
        "supported": True,
        "cartridge": added.name,
        "messages": [m.text for m in added.messages if m.text],
    }


async def remove_cartridge(
    connection: OpenShiftConnection, domain: str, name: str, cartridge: str
) -> Dict[str, Any]:
    service = await _service(connection, domain, name)
    capability = service.get(CapabilityKind.CARTRIDGES)
    if not isinstance(capability, CartridgeCapability):
        return _unsupported(service, "cartridge management")

    await capability.remove_cartridge(cartridge)
    return {"application": service.name, "supported": True, "removed": cartridge}
