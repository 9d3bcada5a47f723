"""Broker resources: connection -> domains -> applications -> sub-resources."""

from .application import Application
from .base import CollectionKind, OpenShiftResource
from .children import Alias, EmbeddedCartridge, EnvironmentVariable, GearGroup
from .connection import ApiModel, OpenShiftConnection, connect
from .domain import Domain

__all__ = [
    "OpenShiftResource",
    "CollectionKind",
    "OpenShiftConnection",
    "ApiModel",
    "connect",
    "Domain",
    "Application",
    "EnvironmentVariable",
    "EmbeddedCartridge",
    "Alias",
    "GearGroup",
]
