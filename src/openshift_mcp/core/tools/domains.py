from __future__ import annotations

from typing import Any, Dict, Optional

from openshift_mcp.core.resources import OpenShiftConnection
from openshift_mcp.core.tools._resolve import _application_summary, _domain


async def list_domains(connection: OpenShiftConnection) -> Dict[str, Any]:
    """
    List the domains (namespaces) of the connected user.
    Returns: {items: [{id, suffix}], total}
    """
    domains = await connection.get_domains()
    items = [{"id": d.id, "suffix": d.suffix} for d in domains]
    return {"items": items, "total": len(items)}


async def list_applications(
    connection: OpenShiftConnection,
    domain: str,
    *,
    name_contains: Optional[str] = None,
) -> Dict[str, Any]:
    """
    List applications of a domain, optionally filtered by a case-insensitive
    name fragment.
    """
    applications = await (await _domain(connection, domain)).get_applications()

    items = [_application_summary(a) for a in applications]
    if name_contains:
        needle = name_contains.strip().casefold()
        items = [i for i in items if needle in i["name"].casefold()]

    return {"domain": domain, "items": items, "total": len(items)}


async def refresh_domains(
    connection: OpenShiftConnection, domain: Optional[str] = None
) -> Dict[str, Any]:
    """
    Forget cached state so later calls re-read the server. Without a domain
    the domain list is re-read; with one, that domain and its applications.
    """
    if domain is None:
        await connection.refresh()
        return {"refreshed": "domains", "total": len(await connection.get_domains())}

    found = await _domain(connection, domain)
    await found.refresh()
    return {
        "refreshed": "domain",
        "domain": found.id,
        "applications": (await found.get_applications()).keys(),
    }


async def get_user(connection: OpenShiftConnection) -> Dict[str, Any]:
    """Return the login and gear usage of the connected user."""
    user = await connection.get_user()
    return {
        "login": user.login,
        "consumed_gears": user.consumed_gears,
        "max_gears": user.max_gears,
    }
