from __future__ import annotations

from typing import Any, ClassVar, List, Mapping, Optional, Type

from ..client import OpenShiftClient
from ..models import (
    AliasModel,
    EmbeddedCartridgeModel,
    EnvironmentVariableModel,
    GearGroupModel,
    GearModel,
    Message,
)
from .base import OpenShiftResource


class EnvironmentVariable(OpenShiftResource[EnvironmentVariableModel]):
    kind: ClassVar[str] = "environment variable"
    model_type: ClassVar[Type[EnvironmentVariableModel]] = EnvironmentVariableModel

    @property
    def identity_key(self) -> str:
        return self._model.name

    @property
    def name(self) -> str:
        return self._model.name

    @property
    def value(self) -> Optional[str]:
        return self._model.value

    @property
    def application(self):
        return self._parent


class EmbeddedCartridge(OpenShiftResource[EmbeddedCartridgeModel]):
    kind: ClassVar[str] = "cartridge"
    model_type: ClassVar[Type[EmbeddedCartridgeModel]] = EmbeddedCartridgeModel

    def __init__(
        self,
        client: OpenShiftClient,
        payload: Mapping[str, Any],
        *,
        parent: Optional[OpenShiftResource] = None,
    ):
        super().__init__(client, payload, parent=parent)
        # Messages the broker returned when this cartridge was added.
        self.messages: List[Message] = []

    @property
    def identity_key(self) -> str:
        return self._model.name

    @property
    def name(self) -> str:
        return self._model.name

    @property
    def display_name(self) -> Optional[str]:
        return self._model.display_name

    @property
    def description(self) -> Optional[str]:
        return self._model.description

    @property
    def url(self) -> Optional[str]:
        return self._model.url

    @property
    def application(self):
        return self._parent


class Alias(OpenShiftResource[AliasModel]):
    kind: ClassVar[str] = "alias"
    model_type: ClassVar[Type[AliasModel]] = AliasModel

    @property
    def identity_key(self) -> str:
        return self._model.id

    @property
    def name(self) -> str:
        return self._model.id

    @property
    def has_private_ssl_certificate(self) -> bool:
        return self._model.has_private_ssl_certificate


class GearGroup(OpenShiftResource[GearGroupModel]):
    kind: ClassVar[str] = "gear group"
    model_type: ClassVar[Type[GearGroupModel]] = GearGroupModel

    @property
    def identity_key(self) -> str:
        return self._model.uuid

    @property
    def uuid(self) -> str:
        return self._model.uuid

    @property
    def name(self) -> Optional[str]:
        return self._model.name

    @property
    def gears(self) -> List[GearModel]:
        return self._model.gears

    @property
    def cartridge_names(self) -> List[str]:
        return self._model.cartridge_names


__all__ = ["EnvironmentVariable", "EmbeddedCartridge", "Alias", "GearGroup"]
