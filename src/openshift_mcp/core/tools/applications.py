from __future__ import annotations

import time
from typing import Any, Dict, Literal

from openshift_mcp.core.adapters import (
    ApplicationService,
    CapabilityKind,
    ScalingCapability,
    adapt,
)
from openshift_mcp.core.resources import OpenShiftConnection
from openshift_mcp.core.tools._resolve import (
    _application,
    _application_summary,
    _service,
    _unsupported,
)

MAX_WAIT_SECONDS = 600.0


async def get_application(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    """
    Application details plus the capabilities the server currently offers.
    """
    return _details(await _service(connection, domain, name), domain)


async def refresh_application(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    """
    Re-read an application from the server: attributes, links and, on next
    use, its environment variables, cartridges, aliases and gear groups.
    Returns the same details as get_application.
    """
    app = await _application(connection, domain, name)
    await app.refresh()
    return _details(adapt(app), domain)


def _details(service: ApplicationService, domain: str) -> Dict[str, Any]:
    summary = _application_summary(service.application)
    summary["domain"] = domain
    summary["capabilities"] = sorted(c.kind.value for c in service.capabilities())
    return summary


async def control_application(
    connection: OpenShiftConnection,
    domain: str,
    name: str,
    action: Literal["start", "stop", "force-stop", "restart"],
) -> Dict[str, Any]:
    """Start, stop, force-stop or restart an application."""
    app = await _application(connection, domain, name)
    if action == "start":
        await app.start()
    elif action == "stop":
        await app.stop()
    elif action == "force-stop":
        await app.stop(force=True)
    elif action == "restart":
        await app.restart()
    else:
        raise ValueError(f"Unknown action {action!r}")
    return {"application": app.name, "action": action, "ok": True}


async def scale_application(
    connection: OpenShiftConnection,
    domain: str,
    name: str,
    direction: Literal["up", "down"],
) -> Dict[str, Any]:
    """Add or remove one gear of a scalable application."""
    service = await _service(connection, domain, name)
    scaling = service.get(CapabilityKind.SCALING)
    if not isinstance(scaling, ScalingCapability):
        return _unsupported(service, "scaling")

    if direction == "up":
        await scaling.scale_up()
    elif direction == "down":
        await scaling.scale_down()
    else:
        raise ValueError(f"Unknown direction {direction!r}")
    return {"application": service.name, "direction": direction, "ok": True}


async def list_gear_groups(
    connection: OpenShiftConnection, domain: str, name: str
) -> Dict[str, Any]:
    """List gear groups with their gears and hosted cartridges."""
    app = await _application(connection, domain, name)
    groups = await app.get_gear_groups()
    return {
        "application": app.name,
        "supported": not groups.unsupported,
        "items": [
            {
                "uuid": g.uuid,
                "name": g.name,
                "cartridges": g.cartridge_names,
                "gears": [{"id": gear.id, "state": gear.state} for gear in g.gears],
            }
            for g in groups
        ],
    }


async def wait_for_application(
    connection: OpenShiftConnection,
    domain: str,
    name: str,
    *,
    timeout_seconds: float = 60.0,
) -> Dict[str, Any]:
    """
    Wait until the application's public host name resolves.
    timeout_seconds is clamped to 0..600.
    """
    app = await _application(connection, domain, name)
    timeout = max(0.0, min(timeout_seconds, MAX_WAIT_SECONDS))
    start = time.monotonic()
    accessible = await app.wait_for_accessible_async(timeout)
    return {
        "application": app.name,
        "url": app.application_url,
        "accessible": accessible,
        "waited_seconds": round(time.monotonic() - start, 3),
    }
