from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Optional, Union, get_origin, get_type_hints

from .resources import OpenShiftConnection

log = logging.getLogger("openshift_mcp.core.registry")

TOOLS_PACKAGE = "openshift_mcp.core.tools"
INJECTED_PARAM = "connection"

ConnectionProvider = Callable[[], OpenShiftConnection]


def discover_tool_modules(package_name: str = TOOLS_PACKAGE) -> List[ModuleType]:
    """Import every module of the tools package. A module that fails to import is logged and left out."""
    package = importlib.import_module(package_name)
    modules: List[ModuleType] = []
    for info in pkgutil.iter_modules(package.__path__, package.__name__ + "."):
        try:
            modules.append(importlib.import_module(info.name))
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", info.name, exc)
    return modules


def _rejection(module: ModuleType, func: Callable) -> Optional[str]:
    if func.__name__.startswith("_"):
        return "private"
    if func.__module__ != module.__name__:
        return "imported"
    params = list(inspect.signature(func).parameters.values())
    if not params or params[0].name != INJECTED_PARAM:
        return f"first parameter must be '{INJECTED_PARAM}'"
    # FastMCP cannot build a schema for Type[...] parameters.
    if any(get_origin(p.annotation) is type for p in params[1:]):
        return "Type[...] parameter"
    return None


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield the module's own public coroutines that take `connection` first."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        reason = _rejection(module, func)
        if reason is None:
            yield func
        elif reason not in ("private", "imported"):
            log.debug("Skipping %s.%s: %s", module.__name__, func.__name__, reason)


def _public_signature(func: Callable) -> inspect.Signature:
    signature = inspect.signature(func)
    hints = get_type_hints(func)
    params = [
        param.replace(annotation=hints.get(name, param.annotation))
        for name, param in list(signature.parameters.items())[1:]
    ]
    return signature.replace(
        parameters=params,
        return_annotation=hints.get("return", signature.return_annotation),
    )


def _bind_connection(func: Callable, provider: ConnectionProvider) -> Callable:
    async def tool(*args, **kwargs):
        return await func(provider(), *args, **kwargs)

    tool.__name__ = func.__name__
    tool.__qualname__ = func.__qualname__
    tool.__doc__ = func.__doc__
    tool.__module__ = func.__module__
    tool.__signature__ = _public_signature(func)  # type: ignore[attr-defined]
    return tool


def register_discovered_tools(
    app,
    connection: Union[ConnectionProvider, OpenShiftConnection],
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """
    Register every discovered tool on `app` (anything with a FastMCP-style
    `.tool(name=...)` decorator) and return the sorted tool names.

    `connection` is either a connection or a zero-argument callable returning
    one; a callable is invoked on every tool call.
    """
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    if isinstance(connection, OpenShiftConnection):
        fixed = connection
        provider: ConnectionProvider = lambda: fixed  # noqa: E731
    else:
        provider = connection

    registered: dict[str, str] = {}
    for module in modules or discover_tool_modules():
        for func in iter_tool_functions(module):
            if func.__name__ in registered:
                raise ValueError(
                    f"Duplicate tool name detected: {func.__name__} "
                    f"({registered[func.__name__]} and {module.__name__})"
                )
            app.tool(name=func.__name__)(_bind_connection(func, provider))
            registered[func.__name__] = module.__name__
            log.info("Registered tool: %s (%s)", func.__name__, module.__name__)

    return sorted(registered)


__all__ = ["discover_tool_modules", "iter_tool_functions", "register_discovered_tools"]
