from __future__ import annotations

from typing import Any, Dict, List, Optional


class OpenShiftError(Exception):
    """Base error for all client failures."""


class TransportError(OpenShiftError):
    """A request could not be completed by the transport collaborator."""


class OpenShiftTimeoutError(TransportError):
    pass


class OpenShiftConnectionError(TransportError):
    pass


class OpenShiftHTTPError(TransportError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        messages: Optional[List[Dict[str, Any]]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.messages = messages or []
        self.response_text = response_text


class OpenShiftParseError(TransportError):
    pass


class MalformedLinkError(OpenShiftError):
    def __init__(self, link_name: str, reason: str):
        super().__init__(f"Malformed link '{link_name}': {reason}")
        self.link_name = link_name


class UnsupportedOperationError(OpenShiftError):
    def __init__(self, operation: str, resource: Optional[str] = None):
        where = f" on {resource}" if resource else ""
        super().__init__(f"Operation '{operation}' is not offered by the server{where}")
        self.operation = operation
        self.resource = resource


class MissingParameterError(OpenShiftError):
    def __init__(self, operation: str, missing: List[str]):
        super().__init__(
            f"Operation '{operation}' requires parameter(s): {', '.join(missing)}"
        )
        self.operation = operation
        self.missing = missing


class DuplicateResourceError(OpenShiftError):
    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} '{key}' already exists")
        self.kind = kind
        self.key = key


class NotFoundError(OpenShiftError):
    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} '{key}' not found")
        self.kind = kind
        self.key = key


__all__ = [
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
]
