"""openshift_mcp package exports."""

from .core import (
    Application,
    ApplicationService,
    CapabilityKind,
    Domain,
    DuplicateResourceError,
    MalformedLinkError,
    MissingParameterError,
    NotFoundError,
    OpenShiftClient,
    OpenShiftConfig,
    OpenShiftConnection,
    OpenShiftError,
    OpenShiftHTTPError,
    TransportError,
    UnsupportedOperationError,
    adapt,
    connect,
    load_env_config,
)

__all__ = [
    "OpenShiftClient",
    "OpenShiftConfig",
    "load_env_config",
    "connect",
    "OpenShiftConnection",
    "Domain",
    "Application",
    "ApplicationService",
    "CapabilityKind",
    "adapt",
    "OpenShiftError",
    "TransportError",
    "OpenShiftHTTPError",
    "MalformedLinkError",
    "UnsupportedOperationError",
    "MissingParameterError",
    "DuplicateResourceError",
    "NotFoundError",
]
