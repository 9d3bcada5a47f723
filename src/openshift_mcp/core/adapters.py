"""
Generic service/project view over broker resources.

A service carries the capabilities that applied when it was adapted. The set
of capability kinds is closed: the server decides *whether* a capability is
available, the client must already know *what* it is. Adapt again after a
refresh to pick up changed links.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple, Type

from .resources import Application, Domain, OpenShiftConnection

log = logging.getLogger("openshift_mcp.core.adapters")


class CapabilityKind(str, Enum):
    ENVIRONMENT_VARIABLES = "environment_variables"
    CARTRIDGES = "cartridges"
    ALIASES = "aliases"
    SCALING = "scaling"


class Capability:
    kind: ClassVar[CapabilityKind]

    def __init__(self, service: "ApplicationService"):
        self.service = service

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.service.name!r})"

    @classmethod
    def applies_to(cls, application: Application) -> bool:
        raise NotImplementedError

    @property
    def application(self) -> Application:
        return self.service.application


class EnvironmentVariableCapability(Capability):
    kind = CapabilityKind.ENVIRONMENT_VARIABLES

    @classmethod
    def applies_to(cls, application: Application) -> bool:
        return application.can_update_environment_variables()

    async def list_environment_variables(self) -> Dict[str, Optional[str]]:
        variables = await self.application.get_environment_variables()
        return {v.name: v.value for v in variables}

    async def get_environment_variable(self, name: str) -> Optional[str]:
        return await self.application.get_environment_variable_value(name)

    async def add_environment_variable(self, name: str, value: str) -> None:
        await self.application.add_environment_variable(name, value)

    async def update_environment_variable(self, name: str, value: str) -> None:
        await self.application.update_environment_variable(name, value)

    async def remove_environment_variable(self, name: str) -> None:
        await self.application.remove_environment_variable(name)


class CartridgeCapability(Capability):
    kind = CapabilityKind.CARTRIDGES

    @classmethod
    def applies_to(cls, application: Application) -> bool:
        return application.can_list_cartridges() and application.can_add_cartridge()

    async def list_cartridges(self) -> List[str]:
        return (await self.application.get_embedded_cartridges()).keys()

    async def add_cartridge(self, name: Optional[str] = None, *, url: Optional[str] = None):
        return await self.application.add_embedded_cartridge(name, url=url)

    async def remove_cartridge(self, name: str) -> None:
        await self.application.remove_embedded_cartridge(name)


class AliasCapability(Capability):
    kind = CapabilityKind.ALIASES

    @classmethod
    def applies_to(cls, application: Application) -> bool:
        return application.can_add_alias()

    async def list_aliases(self) -> List[str]:
        return (await self.application.get_aliases()).keys()

    async def add_alias(self, name: str) -> None:
        await self.application.add_alias(name)

    async def remove_alias(self, name: str) -> None:
        await self.application.remove_alias(name)


class ScalingCapability(Capability):
    kind = CapabilityKind.SCALING

    @classmethod
    def applies_to(cls, application: Application) -> bool:
        return application.scalable and application.can_scale()

    async def scale_up(self) -> None:
        await self.application.scale_up()

    async def scale_down(self) -> None:
        await self.application.scale_down()


CAPABILITY_TYPES: Tuple[Type[Capability], ...] = (
    EnvironmentVariableCapability,
    CartridgeCapability,
    AliasCapability,
    ScalingCapability,
)


class ApplicationService:
    """An application seen as a generic service with optional capabilities."""

    def __init__(self, application: Application):
        self._application = application
        self._capabilities: Dict[CapabilityKind, Capability] = {}
        for capability_type in CAPABILITY_TYPES:
            if capability_type.applies_to(application):
                self._capabilities[capability_type.kind] = capability_type(self)
        log.debug(
            "adapted %s with %s",
            application.name,
            [k.value for k in self._capabilities],
        )

    def __repr__(self) -> str:
        return f"ApplicationService({self.name!r})"

    @property
    def name(self) -> str:
        return self._application.name

    @property
    def application(self) -> Application:
        return self._application

    def capabilities(self) -> List[Capability]:
        return list(self._capabilities.values())

    def get(self, kind: CapabilityKind) -> Optional[Capability]:
        """Capability of that kind, or None when it is not available."""
        return self._capabilities.get(kind)

    def supports(self, kind: CapabilityKind) -> bool:
        return kind in self._capabilities


def adapt(application: Application) -> ApplicationService:
    if not isinstance(application, Application):
        raise TypeError(f"Cannot adapt {type(application).__name__} as a service")
    return ApplicationService(application)


class DomainProject:
    """A domain seen as a project grouping services."""

    def __init__(self, domain: Domain):
        self._domain = domain
        self._services: Optional[List[ApplicationService]] = None

    @property
    def name(self) -> str:
        return self._domain.id

    @property
    def domain(self) -> Domain:
        return self._domain

    async def get_services(self) -> List[ApplicationService]:
        if self._services is None:
            applications = await self._domain.get_applications()
            self._services = [adapt(a) for a in applications]
        return self._services


class ConnectionAdapter:
    def __init__(self, connection: OpenShiftConnection):
        self._connection = connection
        self._projects: Optional[List[DomainProject]] = None

    @property
    def connection(self) -> OpenShiftConnection:
        return self._connection

    async def get_projects(self) -> List[DomainProject]:
        if self._projects is None:
            domains = await self._connection.get_domains()
            self._projects = [DomainProject(d) for d in domains]
        return self._projects


__all__ = [
    "CapabilityKind",
    "Capability",
    "EnvironmentVariableCapability",
    "CartridgeCapability",
    "AliasCapability",
    "ScalingCapability",
    "CAPABILITY_TYPES",
    "ApplicationService",
    "DomainProject",
    "ConnectionAdapter",
    "adapt",
]
