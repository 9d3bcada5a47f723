"""
Parsing and resolution of the link descriptors the broker attaches to every
resource. A resource may only perform operations whose link it carries.
"""

from __future__ import annotations

from enum import Enum
from string import Formatter
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from .errors import MalformedLinkError, MissingParameterError, UnsupportedOperationError


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class LinkDescriptor(BaseModel):
    name: str
    href: str
    method: HttpMethod
    rel: Optional[str] = None
    required_params: FrozenSet[str] = Field(default_factory=frozenset)
    optional_params: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @property
    def template_fields(self) -> FrozenSet[str]:
        return frozenset(
            field for _, field, _, _ in Formatter().parse(self.href) if field
        )


class LinkRequest(BaseModel):
    """Concrete request descriptor handed to the transport."""

    link_name: str
    method: HttpMethod
    url: str
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class LinkMap(Mapping[str, LinkDescriptor]):
    """Immutable name -> LinkDescriptor mapping owned by one resource."""

    def __init__(self, links: Optional[Mapping[str, LinkDescriptor]] = None):
        self._links: Dict[str, LinkDescriptor] = dict(links or {})

    def __getitem__(self, name: str) -> LinkDescriptor:
        return self._links[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"LinkMap({sorted(self._links)})"

    def has(self, name: str) -> bool:
        return name in self._links

    def resolve(self, name: str, params: Optional[Mapping[str, Any]] = None) -> LinkRequest:
        """
        Turn a link into a request.
        - Raises UnsupportedOperationError if the link is absent
        - Raises MissingParameterError if a required parameter is absent or None
        - Substitutes {placeholders} in the href and drops them from the body
        """
        link = self._links.get(name)
        if link is None:
            raise UnsupportedOperationError(name)

        values = {k: v for k, v in (params or {}).items() if v is not None}
        missing = sorted(
            p for p in link.required_params | link.template_fields if p not in values
        )
        if missing:
            raise MissingParameterError(name, missing)

        url = link.href
        fields = link.template_fields
        if fields:
            url = url.format(**{f: quote(str(values[f]), safe="") for f in fields})

        body = {k: v for k, v in values.items() if k not in fields}
        return LinkRequest(link_name=name, method=link.method, url=url, params=body)


def _param_names(name: str, raw: Any, key: str) -> FrozenSet[str]:
    if raw is None:
        return frozenset()
    if not isinstance(raw, list):
        raise MalformedLinkError(name, f"'{key}' must be a list")

    names = set()
    for entry in raw:
        if isinstance(entry, str):
            names.add(entry)
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
            names.add(entry["name"])
        else:
            raise MalformedLinkError(name, f"unnamed entry in '{key}'")
    return frozenset(names)


def parse_link(name: str, raw: Any) -> LinkDescriptor:
    if not isinstance(raw, dict):
        raise MalformedLinkError(name, "descriptor must be an object")

    href = raw.get("href")
    if not isinstance(href, str) or not href:
        raise MalformedLinkError(name, "missing href")

    method = raw.get("method")
    if not isinstance(method, str) or not method:
        raise MalformedLinkError(name, "missing method")
    try:
        http_method = HttpMethod(method.upper())
    except ValueError as exc:
        raise MalformedLinkError(name, f"unsupported method {method!r}") from exc

    link = LinkDescriptor(
        name=name,
        href=href,
        method=http_method,
        rel=raw.get("rel"),
        required_params=_param_names(name, raw.get("required_params"), "required_params"),
        optional_params=_param_names(name, raw.get("optional_params"), "optional_params"),
    )
    try:
        link.template_fields
    except ValueError as exc:
        raise MalformedLinkError(name, f"bad href template {href!r}") from exc
    return link


def parse_links(raw: Optional[Mapping[str, Any]]) -> LinkMap:
    """
    Parse the 'links' object of a broker payload.
    Example: parse_links(app_json['links']).has('START') -> True
    """
    if raw is None:
        return LinkMap()
    if not isinstance(raw, Mapping):
        raise MalformedLinkError("<links>", "links must be an object")
    return LinkMap({name: parse_link(name, desc) for name, desc in raw.items()})


__all__ = [
    "HttpMethod",
    "LinkDescriptor",
    "LinkRequest",
    "LinkMap",
    "parse_link",
    "parse_links",
]
