"""Core domain surface for openshift-mcp (transport-agnostic)."""

from .adapters import (
    AliasCapability,
    ApplicationService,
    Capability,
    CapabilityKind,
    CartridgeCapability,
    ConnectionAdapter,
    DomainProject,
    EnvironmentVariableCapability,
    ScalingCapability,
    adapt,
)
from .client import OpenShiftClient, RetryConfig
from .config import OpenShiftConfig, load_env_config
from .errors import (
    DuplicateResourceError,
    MalformedLinkError,
    MissingParameterError,
    NotFoundError,
    OpenShiftConnectionError,
    OpenShiftError,
    OpenShiftHTTPError,
    OpenShiftParseError,
    OpenShiftTimeoutError,
    TransportError,
    UnsupportedOperationError,
)
from .links import HttpMethod, LinkDescriptor, LinkMap, LinkRequest, parse_links
from .negotiator import CapabilityNegotiator
from .poller import PollState, PollStatus, wait_for_accessible, wait_for_accessible_async
from .reconcile import ResourceCollection, reconcile
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from .resources import (
    Alias,
    Application,
    CollectionKind,
    Domain,
    EmbeddedCartridge,
    EnvironmentVariable,
    GearGroup,
    OpenShiftConnection,
    OpenShiftResource,
    connect,
)

__all__ = [
    # Transport
    "OpenShiftClient",
    "RetryConfig",
    "OpenShiftConfig",
    "load_env_config",
    # Exceptions
    "OpenShiftError",
    "TransportError",
    "OpenShiftTimeoutError",
    "OpenShiftConnectionError",
    "OpenShiftHTTPError",
    "OpenShiftParseError",
    "MalformedLinkError",
    "UnsupportedOperationError",
    "MissingParameterError",
    "DuplicateResourceError",
    "NotFoundError",
    # Links
    "HttpMethod",
    "LinkDescriptor",
    "LinkMap",
    "LinkRequest",
    "parse_links",
    "CapabilityNegotiator",
    # Collections
    "ResourceCollection",
    "reconcile",
    # Resources
    "OpenShiftResource",
    "CollectionKind",
    "OpenShiftConnection",
    "connect",
    "Domain",
    "Application",
    "EnvironmentVariable",
    "EmbeddedCartridge",
    "Alias",
    "GearGroup",
    # Polling
    "PollState",
    "PollStatus",
    "wait_for_accessible",
    "wait_for_accessible_async",
    # Adapters
    "CapabilityKind",
    "Capability",
    "EnvironmentVariableCapability",
    "CartridgeCapability",
    "AliasCapability",
    "ScalingCapability",
    "ApplicationService",
    "DomainProject",
    "ConnectionAdapter",
    "adapt",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
