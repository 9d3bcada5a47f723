from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, Optional, Tuple, Type

from ..client import OpenShiftClient
from ..config import OpenShiftConfig
from ..errors import DuplicateResourceError, OpenShiftParseError
from ..links import LinkMap, parse_links
from ..models import BaseResourceModel, RestResponse, UserModel
from ..negotiator import ADD_DOMAIN, GET_USER, LIST_DOMAINS
from ..reconcile import ResourceCollection
from .base import CollectionKind, OpenShiftResource
from .domain import Domain

log = logging.getLogger("openshift_mcp.core.resources.connection")


class ApiModel(BaseResourceModel):
    server_url: Optional[str] = None


class OpenShiftConnection(OpenShiftResource[ApiModel]):
    """
    Root of the resource graph. The API document is nothing but links, which
    is where every navigation (domains, user, ...) starts.
    """

    kind: ClassVar[str] = "connection"
    model_type: ClassVar[Type[ApiModel]] = ApiModel
    children = {CollectionKind.DOMAINS: (LIST_DOMAINS, Domain)}

    @classmethod
    def _parse(cls, payload: Mapping[str, Any]) -> Tuple[Any, LinkMap]:
        # The API root's data object *is* the link map.
        return ApiModel(), parse_links(payload)

    @classmethod
    async def connect(
        cls, config: OpenShiftConfig, *, client: Optional[OpenShiftClient] = None
    ) -> "OpenShiftConnection":
        client = client or OpenShiftClient.from_config(config)
        response = await client.get_api()
        connection = cls(client, response.data_object())
        log.info("connected to %s as %s", client.server_url, client.login)
        return connection

    @property
    def identity_key(self) -> str:
        return self._client.server_url

    @property
    def server(self) -> str:
        return self._client.server_url

    async def _fetch_self(self) -> RestResponse:
        return await self._client.get_api()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenShiftConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get_user(self) -> UserModel:
        response = await self._execute(GET_USER)
        try:
            return UserModel.model_validate(response.data_object())
        except ValueError as exc:
            raise OpenShiftParseError(f"Unexpected user payload: {exc}") from exc

    async def get_domains(self) -> ResourceCollection[Domain]:
        return await self._get_collection(CollectionKind.DOMAINS)

    async def get_domain(self, domain_id: str) -> Optional[Domain]:
        return (await self.get_domains()).get(domain_id)

    async def create_domain(self, domain_id: str) -> Domain:
        self._require(ADD_DOMAIN)
        domains = await self.get_domains()
        if domain_id in domains:
            raise DuplicateResourceError(Domain.kind, domain_id)

        response = await self._execute(ADD_DOMAIN, name=domain_id)
        domain = Domain(self._client, response.data_object(), parent=self)
        if not domains.unsupported:
            domains.add(domain)
        log.info("domain %s created", domain_id)
        return domain


async def connect(config: OpenShiftConfig, **kwargs: Any) -> OpenShiftConnection:
    return await OpenShiftConnection.connect(config, **kwargs)


__all__ = ["ApiModel", "OpenShiftConnection", "connect"]
