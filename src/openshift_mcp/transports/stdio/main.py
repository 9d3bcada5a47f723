from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from openshift_mcp.core.config import load_env_config
from openshift_mcp.core.logging import setup_logging
from openshift_mcp.core.registry import register_discovered_tools
from openshift_mcp.core.resources import connect


async def main() -> None:
    setup_logging()
    config = load_env_config(use_dotenv=True)
    connection = await connect(config)

    app = FastMCP("openshift-mcp")
    register_discovered_tools(app, lambda: connection)

    try:
        await app.run_stdio_async()
    finally:
        await connection.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
