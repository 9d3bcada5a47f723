"""
Common behaviour of broker resources: link-gated execution, atomic refresh
and lazily loaded child collections.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from pydantic import ValidationError

from ..client import OpenShiftClient
from ..errors import OpenShiftParseError, UnsupportedOperationError
from ..links import LinkMap, parse_links
from ..models import BaseResourceModel, RestResponse
from ..negotiator import GET, CapabilityNegotiator
from ..reconcile import ResourceCollection, reconcile

log = logging.getLogger("openshift_mcp.core.resources")

M = TypeVar("M", bound=BaseResourceModel)


class CollectionKind(str, Enum):
    DOMAINS = "domains"
    APPLICATIONS = "applications"
    ENVIRONMENT_VARIABLES = "environment_variables"
    CARTRIDGES = "cartridges"
    ALIASES = "aliases"
    GEAR_GROUPS = "gear_groups"


@dataclass
class _CollectionSlot:
    # loaded: the live collection; previous: reconciliation base kept across refresh
    loaded: Optional[ResourceCollection] = None
    previous: Optional[ResourceCollection] = None


class OpenShiftResource(Generic[M]):
    """
    A broker resource: typed attributes plus the links it was served with.
    Subclasses declare model_type and, for child collections, the list link
    and child class per CollectionKind.
    """

    kind: ClassVar[str] = "resource"
    model_type: ClassVar[Type[BaseResourceModel]]
    children: ClassVar[Dict[CollectionKind, Tuple[str, Type["OpenShiftResource"]]]] = {}

    def __init__(
        self,
        client: OpenShiftClient,
        payload: Mapping[str, Any],
        *,
        parent: Optional["OpenShiftResource"] = None,
    ):
        self._client = client
        self._parent = parent
        self._slots: Dict[CollectionKind, _CollectionSlot] = {}
        model, links = self._parse(payload)
        self._model: M = model
        self._set_links(links)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identity_key!r})"

    # --- identity / attributes ---------------------------------------------- #

    @property
    def identity_key(self) -> str:
        raise NotImplementedError

    @property
    def model(self) -> M:
        return self._model

    @property
    def links(self) -> LinkMap:
        return self._links

    @property
    def negotiator(self) -> CapabilityNegotiator:
        return self._negotiator

    @property
    def client(self) -> OpenShiftClient:
        return self._client

    def has_link(self, link_name: str) -> bool:
        return self._links.has(link_name)

    @classmethod
    def _parse(cls, payload: Mapping[str, Any]) -> Tuple[Any, LinkMap]:
        links = parse_links(payload.get("links"))
        try:
            model = cls.model_type.model_validate(dict(payload))
        except ValidationError as exc:
            raise OpenShiftParseError(
                f"Payload did not match {cls.model_type.__name__}: {exc}"
            ) from exc
        return model, links

    def _set_links(self, links: LinkMap) -> None:
        self._links = links
        self._negotiator = CapabilityNegotiator(links)
        self._drop_stale_collections()

    def _drop_stale_collections(self) -> None:
        # A cached collection is only valid while its list link is offered
        # exactly as when it was loaded.
        for kind, slot in self._slots.items():
            if slot.loaded is None:
                continue
            list_link, _ = self.children[kind]
            if self._links.has(list_link) == slot.loaded.unsupported:
                log.debug("%r: %s changed, dropping cached %s", self, list_link, kind.value)
                slot.loaded = None
                slot.previous = None

    def _apply_payload(self, payload: Mapping[str, Any]) -> None:
        # Parse fully before touching state so a bad payload changes nothing.
        model, links = self._parse(payload)
        self._model = model
        self._set_links(links)

    def update_from(self, other: "OpenShiftResource") -> None:
        """Adopt another instance's attributes and links, keeping this identity."""
        if other is self:
            return
        self._model = other._model
        self._set_links(other._links)

    # --- execution ------------------------------------------------------------ #

    def _require(self, link_name: str) -> None:
        if not self._links.has(link_name):
            raise UnsupportedOperationError(link_name, repr(self))

    async def _execute(self, link_name: str, **params: Any) -> RestResponse:
        self._require(link_name)
        request = self._links.resolve(link_name, params)
        return await self._client.execute(request)

    async def _fetch_self(self) -> RestResponse:
        return await self._execute(GET)

    async def refresh(self) -> None:
        """
        Re-fetch own attributes and links, then mark every child collection
        as not loaded. All-or-nothing: on any failure nothing changes.
        """
        response = await self._fetch_self()
        model, links = self._parse(response.data_object())

        self._model = model
        self._set_links(links)
        for kind in self._slots:
            self._invalidate_collection(kind)
        log.debug("refreshed %r", self)

    # --- child collections ---------------------------------------------------- #

    def _build_child(
        self, kind: CollectionKind, payload: Mapping[str, Any]
    ) -> "OpenShiftResource":
        _, child_type = self.children[kind]
        return child_type(self._client, payload, parent=self)

    async def _get_collection(self, kind: CollectionKind) -> ResourceCollection:
        """
        Cached collection, or an empty 'unsupported' one when the list link is
        absent (no fetch), or exactly one fetch reconciled into the cache.
        """
        slot = self._slots.setdefault(kind, _CollectionSlot())
        if slot.loaded is not None:
            return slot.loaded

        list_link, _ = self.children[kind]
        if not self._links.has(list_link):
            slot.loaded = ResourceCollection(kind=kind.value, unsupported=True)
            slot.previous = None
            log.debug("%r does not offer %s", self, list_link)
            return slot.loaded

        response = await self._execute(list_link)
        fresh = [self._build_child(kind, item) for item in response.data_list()]
        base = slot.previous or ResourceCollection(kind=kind.value)
        slot.loaded = reconcile(base, fresh)
        slot.previous = None
        return slot.loaded

    def _invalidate_collection(self, kind: CollectionKind) -> None:
        """Mark as not loaded, keeping the old contents as reconciliation base."""
        slot = self._slots.get(kind)
        if slot is None or slot.loaded is None:
            return
        if not slot.loaded.unsupported:
            slot.previous = slot.loaded
        slot.loaded = None

    async def _reload_collection(self, kind: CollectionKind) -> ResourceCollection:
        self._invalidate_collection(kind)
        return await self._get_collection(kind)

    def _forget_child(self, kind: CollectionKind, key: str) -> None:
        slot = self._slots.get(kind)
        if slot is None or slot.loaded is None:
            return
        if key in slot.loaded:
            slot.loaded.remove(key)


__all__ = ["CollectionKind", "OpenShiftResource"]
