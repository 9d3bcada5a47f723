from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime
from typing import Optional

from openshift_mcp.core.adapters import CapabilityKind, adapt
from openshift_mcp.core.config import load_env_config
from openshift_mcp.core.errors import OpenShiftError
from openshift_mcp.core.resources import connect


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    try:
        config = load_env_config()
    except ValueError as exc:
        return _fail(str(exc))

    cfg_domain = _env("TEST_DOMAIN")
    cfg_app = _env("TEST_APPLICATION")
    cleanup = _env("SMOKE_TEST_CLEANUP", "1") == "1"

    print("Config:")
    print(f"  server: {config.server_url}")
    print(f"  domain: {cfg_domain}")
    print(f"  application: {cfg_app}")
    print(f"  cleanup: {cleanup}")

    _print_step("Connect")
    try:
        connection = await connect(config)
    except OpenShiftError as exc:
        return _fail(f"Connect failed: {exc}")

    async with connection:
        # --- Domain ---
        _print_step("List domains")
        domains = list(await connection.get_domains())
        if not domains:
            return _fail("No domains available.")
        domain = next((d for d in domains if d.id == cfg_domain), domains[0])
        print(f"Selected domain: {domain.id}")

        # --- Application ---
        _print_step("List applications")
        applications = list(await domain.get_applications())
        if not applications:
            return _fail(f"No applications in domain {domain.id}.")
        app = next((a for a in applications if a.name == cfg_app), applications[0])
        print(f"Selected application: {app.name} ({app.application_url})")

        # --- Capabilities ---
        _print_step("Capabilities")
        service = adapt(app)
        print("  " + (", ".join(c.kind.value for c in service.capabilities()) or "none"))

        env = service.get(CapabilityKind.ENVIRONMENT_VARIABLES)
        if env is None:
            print("Environment variables not offered; skipping round trip.")
        else:
            _print_step("Environment variable round trip")
            var = f"SMOKE_{datetime.utcnow().strftime('%Y%m%d%H%M%S')}"
            await env.add_environment_variable(var, "1")
            await app.refresh()
            value = await app.get_environment_variable_value(var)
            if value != "1":
                return _fail(f"Expected {var}=1 after refresh, got {value!r}")
            print(f"Verified {var}=1")
            if cleanup:
                await env.remove_environment_variable(var)
                print(f"Removed {var}")

        # --- Reachability ---
        _print_step("Wait for accessible")
        accessible = await app.wait_for_accessible_async(30.0)
        print(f"accessible={accessible}")

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    exit_code = asyncio.run(run_smoke_test())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
