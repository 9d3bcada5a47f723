from __future__ import annotations

import logging
from typing import ClassVar, Dict, Optional, Type

from ..errors import DuplicateResourceError
from ..models import DomainModel
from ..negotiator import ADD_APPLICATION, DELETE, LIST_APPLICATIONS
from ..reconcile import ResourceCollection
from .application import Application
from .base import CollectionKind, OpenShiftResource

log = logging.getLogger("openshift_mcp.core.resources.domain")


class Domain(OpenShiftResource[DomainModel]):
    kind: ClassVar[str] = "domain"
    model_type: ClassVar[Type[DomainModel]] = DomainModel
    children = {CollectionKind.APPLICATIONS: (LIST_APPLICATIONS, Application)}

    @property
    def identity_key(self) -> str:
        return self._model.id

    @property
    def id(self) -> str:
        return self._model.id

    @property
    def suffix(self) -> Optional[str]:
        return self._model.suffix

    @property
    def connection(self):
        return self._parent

    async def get_applications(self) -> ResourceCollection[Application]:
        return await self._get_collection(CollectionKind.APPLICATIONS)

    async def get_application_by_name(self, name: str) -> Optional[Application]:
        return (await self.get_applications()).get(name)

    async def has_application_named(self, name: str) -> bool:
        return name in await self.get_applications()

    async def create_application(
        self,
        name: str,
        cartridge: str,
        *,
        scale: bool = False,
        gear_profile: Optional[str] = None,
        initial_git_url: Optional[str] = None,
        environment_variables: Optional[Dict[str, str]] = None,
    ) -> Application:
        self._require(ADD_APPLICATION)
        applications = await self.get_applications()
        if name in applications:
            raise DuplicateResourceError(Application.kind, name)

        response = await self._execute(
            ADD_APPLICATION,
            name=name,
            cartridges=[{"name": cartridge}],
            scale=scale,
            gear_size=gear_profile,
            initial_git_url=initial_git_url,
            environment_variables=[
                {"name": k, "value": v} for k, v in environment_variables.items()
            ]
            if environment_variables
            else None,
        )
        application = Application(self._client, response.data_object(), parent=self)
        if not applications.unsupported:
            applications.add(application)
        log.info("application %s created in domain %s", name, self.id)
        return application

    async def destroy(self, force: bool = False) -> None:
        await self._execute(DELETE, force=force)
        if self._parent is not None:
            self._parent._forget_child(CollectionKind.DOMAINS, self.id)
        log.info("domain %s destroyed", self.id)


__all__ = ["Domain"]
