from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Type, Union

from .. import poller
from ..errors import DuplicateResourceError, NotFoundError, UnsupportedOperationError
from ..models import ApplicationModel
from ..negotiator import (
    ADD_ALIAS,
    ADD_CARTRIDGE,
    ADD_ENVIRONMENT_VARIABLE,
    DELETE,
    FORCE_STOP,
    GET_GEAR_GROUPS,
    LIST_ALIASES,
    LIST_CARTRIDGES,
    LIST_ENVIRONMENT_VARIABLES,
    RESTART,
    SCALE_DOWN,
    SCALE_UP,
    SET_UNSET_ENVIRONMENT_VARIABLES,
    START,
    STOP,
    UPDATE,
)
from ..reconcile import ResourceCollection
from .base import CollectionKind, OpenShiftResource
from .children import Alias, EmbeddedCartridge, EnvironmentVariable, GearGroup

log = logging.getLogger("openshift_mcp.core.resources.application")

# Event names the broker expects alongside each lifecycle link.
_EVENTS = {
    START: "start",
    STOP: "stop",
    FORCE_STOP: "force-stop",
    RESTART: "restart",
    SCALE_UP: "scale-up",
    SCALE_DOWN: "scale-down",
}


class Application(OpenShiftResource[ApplicationModel]):
    kind: ClassVar[str] = "application"
    model_type: ClassVar[Type[ApplicationModel]] = ApplicationModel
    children = {
        CollectionKind.ENVIRONMENT_VARIABLES: (
            LIST_ENVIRONMENT_VARIABLES,
            EnvironmentVariable,
        ),
        CollectionKind.CARTRIDGES: (LIST_CARTRIDGES, EmbeddedCartridge),
        CollectionKind.ALIASES: (LIST_ALIASES, Alias),
        CollectionKind.GEAR_GROUPS: (GET_GEAR_GROUPS, GearGroup),
    }

    @property
    def identity_key(self) -> str:
        return self._model.name

    # --- attributes ----------------------------------------------------------- #

    @property
    def name(self) -> str:
        return self._model.name

    @property
    def uuid(self) -> Optional[str]:
        return self._model.uuid

    @property
    def application_url(self) -> Optional[str]:
        return self._model.app_url

    @property
    def git_url(self) -> Optional[str]:
        return self._model.git_url

    @property
    def ssh_url(self) -> Optional[str]:
        return self._model.ssh_url

    @property
    def initial_git_url(self) -> Optional[str]:
        return self._model.initial_git_url

    @property
    def framework(self) -> Optional[str]:
        return self._model.framework

    @property
    def gear_profile(self) -> Optional[str]:
        return self._model.gear_profile

    @property
    def scalable(self) -> bool:
        return self._model.scalable

    @property
    def deployment_type(self) -> Optional[str]:
        """'git' or 'binary'."""
        return self._model.deployment_type

    @property
    def creation_time(self) -> Optional[datetime]:
        return self._model.creation_time

    @property
    def domain(self):
        return self._parent

    # --- capability predicates ------------------------------------------------ #

    def can_get_environment_variables(self) -> bool:
        return self._negotiator.can_get_environment_variables()

    def can_update_environment_variables(self) -> bool:
        return self._negotiator.can_update_environment_variables()

    def can_add_environment_variable(self) -> bool:
        return self._negotiator.can_add_environment_variable()

    def can_list_cartridges(self) -> bool:
        return self._negotiator.can_list_cartridges()

    def can_add_cartridge(self) -> bool:
        return self._negotiator.can_add_cartridge()

    def can_list_aliases(self) -> bool:
        return self._negotiator.can_list_aliases()

    def can_add_alias(self) -> bool:
        return self._negotiator.can_add_alias()

    def can_get_gear_groups(self) -> bool:
        return self._negotiator.can_get_gear_groups()

    def can_scale(self) -> bool:
        return self._negotiator.can_scale()

    # --- lifecycle ------------------------------------------------------------ #

    async def _event(
        self, link_name: str, invalidate: Iterable[CollectionKind] = (), **params: Any
    ) -> None:
        response = await self._execute(link_name, event=_EVENTS[link_name], **params)
        payload = response.data_object()
        if payload:
            self._apply_payload(payload)
        for kind in invalidate:
            self._invalidate_collection(kind)
        log.info("application %s: %s", self.name, _EVENTS[link_name])

    async def start(self) -> None:
        await self._event(START)

    async def stop(self, force: bool = False) -> None:
        await self._event(FORCE_STOP if force else STOP)

    async def restart(self) -> None:
        await self._event(RESTART)

    async def scale_up(self) -> None:
        await self._event(SCALE_UP, invalidate=[CollectionKind.GEAR_GROUPS])

    async def scale_down(self) -> None:
        await self._event(SCALE_DOWN, invalidate=[CollectionKind.GEAR_GROUPS])

    async def set_deployment_type(self, deployment_type: str) -> Optional[str]:
        """Switch between 'git' and 'binary' deployments; returns the type now in effect."""
        if not deployment_type:
            raise ValueError("deployment_type must be provided.")
        response = await self._execute(UPDATE, deployment_type=deployment_type)
        payload = response.data_object()
        if payload:
            self._apply_payload(payload)
        log.info("application %s: deployment type %s", self.name, self.deployment_type)
        return self.deployment_type

    async def destroy(self) -> None:
        await self._execute(DELETE)
        if self._parent is not None:
            self._parent._forget_child(CollectionKind.APPLICATIONS, self.name)
        log.info("application %s destroyed", self.name)

    # --- environment variables ------------------------------------------------ #

    async def get_environment_variables(self) -> ResourceCollection[EnvironmentVariable]:
        return await self._get_collection(CollectionKind.ENVIRONMENT_VARIABLES)

    async def get_environment_variable(self, name: str) -> Optional[EnvironmentVariable]:
        return (await self.get_environment_variables()).get(name)

    async def get_environment_variable_value(self, name: str) -> Optional[str]:
        variable = await self.get_environment_variable(name)
        return variable.value if variable else None

    async def has_environment_variable(self, name: str) -> bool:
        return name in await self.get_environment_variables()

    async def add_environment_variable(self, name: str, value: str) -> EnvironmentVariable:
        self._require(ADD_ENVIRONMENT_VARIABLE)
        if not name:
            raise ValueError("name must be provided.")

        variables = await self.get_environment_variables()
        if name in variables:
            raise DuplicateResourceError(EnvironmentVariable.kind, name)

        response = await self._execute(ADD_ENVIRONMENT_VARIABLE, name=name, value=value)
        variable = EnvironmentVariable(self._client, response.data_object(), parent=self)
        if not variables.unsupported:
            variables.add(variable)
        return variable

    async def add_environment_variables(
        self, values: Mapping[str, str]
    ) -> Dict[str, EnvironmentVariable]:
        self._require(SET_UNSET_ENVIRONMENT_VARIABLES)
        if not values:
            return {}

        variables = await self.get_environment_variables()
        for name in values:
            if name in variables:
                raise DuplicateResourceError(EnvironmentVariable.kind, name)

        response = await self._execute(
            SET_UNSET_ENVIRONMENT_VARIABLES,
            environment_variables=[{"name": n, "value": v} for n, v in values.items()],
        )
        # Parse everything before inserting anything.
        added = [
            EnvironmentVariable(self._client, item, parent=self)
            for item in response.data_list()
            if item.get("name") in values
        ]
        result: Dict[str, EnvironmentVariable] = {}
        for variable in added:
            if not variables.unsupported and variable.name not in variables:
                variables.add(variable)
            result[variable.name] = variables.get(variable.name) or variable
        return result

    async def update_environment_variable(self, name: str, value: str) -> EnvironmentVariable:
        """Update in place: callers holding the variable see the new value."""
        if not self.can_update_environment_variables():
            raise UnsupportedOperationError(SET_UNSET_ENVIRONMENT_VARIABLES, repr(self))

        variable = await self.get_environment_variable(name)
        if variable is None:
            raise NotFoundError(EnvironmentVariable.kind, name)

        if variable.has_link(UPDATE):
            response = await variable._execute(UPDATE, value=value)
            variable._apply_payload(response.data_object())
            return variable

        response = await self._execute(
            SET_UNSET_ENVIRONMENT_VARIABLES,
            environment_variables=[{"name": name, "value": value}],
        )
        for item in response.data_list():
            if item.get("name") == name:
                variable._apply_payload(item)
        return variable

    async def remove_environment_variable(
        self, variable: Union[str, EnvironmentVariable]
    ) -> None:
        """
        Remove by name or by a previously fetched object. Objects are
        re-resolved by name against the current collection first.
        """
        name = variable.name if isinstance(variable, EnvironmentVariable) else variable
        if not self.can_update_environment_variables():
            raise UnsupportedOperationError(SET_UNSET_ENVIRONMENT_VARIABLES, repr(self))

        variables = await self.get_environment_variables()
        current = variables.get(name)
        if current is None:
            raise NotFoundError(EnvironmentVariable.kind, name)

        if current.has_link(DELETE):
            await current._execute(DELETE)
        else:
            # Unset = a name without a value.
            await self._execute(
                SET_UNSET_ENVIRONMENT_VARIABLES, environment_variables=[{"name": name}]
            )
        variables.remove(name)

    # --- cartridges ----------------------------------------------------------- #

    async def get_embedded_cartridges(self) -> ResourceCollection[EmbeddedCartridge]:
        return await self._get_collection(CollectionKind.CARTRIDGES)

    async def get_embedded_cartridge(self, name: str) -> Optional[EmbeddedCartridge]:
        return (await self.get_embedded_cartridges()).get(name)

    async def has_embedded_cartridge(self, name: str) -> bool:
        return name in await self.get_embedded_cartridges()

    async def add_embedded_cartridge(
        self, name: Optional[str] = None, *, url: Optional[str] = None
    ) -> EmbeddedCartridge:
        """Embed a cartridge by name, or a downloadable one by url."""
        self._require(ADD_CARTRIDGE)
        if not name and not url:
            raise ValueError("Either name or url must be provided.")

        cartridges = await self.get_embedded_cartridges()
        if name and name in cartridges:
            raise DuplicateResourceError(EmbeddedCartridge.kind, name)

        response = await self._execute(ADD_CARTRIDGE, name=name, url=url)
        cartridge = EmbeddedCartridge(self._client, response.data_object(), parent=self)
        cartridge.messages = list(response.messages)

        existing = cartridges.get(cartridge.name)
        if existing is not None:
            # Downloadable cartridges are only named once the broker resolved them.
            existing.update_from(cartridge)
            existing.messages = cartridge.messages
            return existing
        if not cartridges.unsupported:
            cartridges.add(cartridge)
        return cartridge

    async def add_embedded_cartridges(self, names: Iterable[str]) -> List[EmbeddedCartridge]:
        """
        Embed several cartridges, one request each, in the given order.
        Duplicates are rejected before anything is sent.
        """
        self._require(ADD_CARTRIDGE)
        names = list(names)
        cartridges = await self.get_embedded_cartridges()
        for index, name in enumerate(names):
            if name in cartridges or name in names[:index]:
                raise DuplicateResourceError(EmbeddedCartridge.kind, name)
        return [await self.add_embedded_cartridge(name) for name in names]

    async def remove_embedded_cartridges(
        self, cartridges: Iterable[Union[str, EmbeddedCartridge]]
    ) -> List[str]:
        """Remove those of the given cartridges that are embedded; others are skipped. Returns the removed names."""
        embedded = await self.get_embedded_cartridges()
        removed: List[str] = []
        for cartridge in cartridges:
            name = cartridge.name if isinstance(cartridge, EmbeddedCartridge) else cartridge
            if name in embedded:
                await self.remove_embedded_cartridge(name)
                removed.append(name)
        return removed

    async def remove_embedded_cartridge(
        self, cartridge: Union[str, EmbeddedCartridge]
    ) -> None:
        name = cartridge.name if isinstance(cartridge, EmbeddedCartridge) else cartridge
        cartridges = await self.get_embedded_cartridges()
        current = cartridges.get(name)
        if current is None:
            raise NotFoundError(EmbeddedCartridge.kind, name)

        await current._execute(DELETE)
        cartridges.remove(name)

    # --- aliases -------------------------------------------------------------- #

    async def get_aliases(self) -> ResourceCollection[Alias]:
        return await self._get_collection(CollectionKind.ALIASES)

    async def has_alias(self, name: str) -> bool:
        return name in await self.get_aliases()

    async def add_alias(self, name: str) -> Alias:
        self._require(ADD_ALIAS)
        aliases = await self.get_aliases()
        if name in aliases:
            raise DuplicateResourceError(Alias.kind, name)

        response = await self._execute(ADD_ALIAS, id=name)
        alias = Alias(self._client, response.data_object(), parent=self)
        if not aliases.unsupported:
            aliases.add(alias)
        return alias

    async def remove_alias(self, name: str) -> None:
        aliases = await self.get_aliases()
        current = aliases.get(name)
        if current is None:
            raise NotFoundError(Alias.kind, name)

        await current._execute(DELETE)
        aliases.remove(name)

    # --- gear groups ---------------------------------------------------------- #

    async def get_gear_groups(self) -> ResourceCollection[GearGroup]:
        return await self._get_collection(CollectionKind.GEAR_GROUPS)

    # --- availability --------------------------------------------------------- #

    def _public_url(self) -> str:
        if not self.application_url:
            raise ValueError(f"Application {self.name} has no public url.")
        return self.application_url

    def wait_for_accessible(self, timeout: float, **kwargs: Any) -> bool:
        """Block until the public url resolves; False after `timeout` seconds."""
        return poller.wait_for_accessible(self._public_url(), timeout, **kwargs)

    def wait_for_accessible_async(self, timeout: float, **kwargs: Any) -> "asyncio.Task[bool]":
        return poller.wait_for_accessible_async(self._public_url(), timeout, **kwargs)


__all__ = ["Application"]
