import pytest
from openshift_mcp.core.errors import (
    MalformedLinkError,
    MissingParameterError,
    UnsupportedOperationError,
)
from openshift_mcp.core.links import HttpMethod, LinkMap, parse_link, parse_links
from openshift_mcp.core.negotiator import CapabilityNegotiator
from payloads import APP_URL, ENV_URL, full_application_links, link


def test_parse_links_reads_method_and_params():
    links = parse_links(full_application_links())

    add = links["ADD_ENVIRONMENT_VARIABLE"]
    assert add.method is HttpMethod.POST
    assert add.href == ENV_URL
    assert add.required_params == frozenset({"name", "value"})
    assert links.has("START")
    assert not links.has("MAKE_COFFEE")


def test_parse_links_none_is_empty():
    links = parse_links(None)
    assert len(links) == 0
    assert not links.has("GET")


def test_parse_link_accepts_lowercase_method_and_plain_param_names():
    parsed = parse_link(
        "UPDATE", {"href": f"{APP_URL}/x", "method": "put", "required_params": ["value"]}
    )
    assert parsed.method is HttpMethod.PUT
    assert parsed.required_params == frozenset({"value"})


@pytest.mark.parametrize(
    "raw, reason",
    [
        ({"method": "GET"}, "missing href"),
        ({"href": APP_URL}, "missing method"),
        ({"href": APP_URL, "method": "PATCH"}, "unsupported method"),
        ({"href": APP_URL, "method": "GET", "required_params": "name"}, "must be a list"),
        ({"href": APP_URL, "method": "GET", "optional_params": [{"type": "x"}]}, "unnamed"),
        ("not-an-object", "must be an object"),
    ],
)
def test_parse_link_rejects_malformed_descriptors(raw, reason):
    with pytest.raises(MalformedLinkError) as exc:
        parse_link("BROKEN", raw)
    assert reason in str(exc.value)
    assert exc.value.link_name == "BROKEN"


def test_parse_links_rejects_non_object():
    with pytest.raises(MalformedLinkError):
        parse_links(["GET"])  # type: ignore[arg-type]


def test_resolve_builds_request_with_params():
    links = parse_links(full_application_links())

    request = links.resolve("ADD_ENVIRONMENT_VARIABLE", {"name": "FOO", "value": "123"})

    assert request.link_name == "ADD_ENVIRONMENT_VARIABLE"
    assert request.method is HttpMethod.POST
    assert request.url == ENV_URL
    assert request.params == {"name": "FOO", "value": "123"}


def test_resolve_absent_link_is_unsupported():
    links = LinkMap()
    with pytest.raises(UnsupportedOperationError) as exc:
        links.resolve("START")
    assert exc.value.operation == "START"


def test_resolve_missing_required_param():
    links = parse_links(full_application_links())
    with pytest.raises(MissingParameterError) as exc:
        links.resolve("ADD_ENVIRONMENT_VARIABLE", {"name": "FOO", "value": None})
    assert exc.value.missing == ["value"]


def test_resolve_substitutes_href_template():
    links = parse_links(
        {"GET_VARIABLE": link("GET", f"{APP_URL}/environment-variable/{{name}}")}
    )

    request = links.resolve("GET_VARIABLE", {"name": "A B", "verbose": True})

    assert request.url == f"{APP_URL}/environment-variable/A%20B"
    assert request.params == {"verbose": True}


def test_resolve_template_field_is_required():
    links = parse_links({"GET_VARIABLE": link("GET", f"{APP_URL}/{{name}}")})
    with pytest.raises(MissingParameterError) as exc:
        links.resolve("GET_VARIABLE")
    assert exc.value.missing == ["name"]


def test_negotiator_reports_environment_variable_capabilities():
    full = CapabilityNegotiator(parse_links(full_application_links()))
    assert full.can_get_environment_variables()
    assert full.can_update_environment_variables()
    assert full.can_scale()

    readonly = CapabilityNegotiator(
        parse_links({"LIST_ENVIRONMENT_VARIABLES": link("GET", ENV_URL)})
    )
    assert readonly.can_get_environment_variables()
    assert not readonly.can_update_environment_variables()
    assert not readonly.can_add_environment_variable()
    assert not readonly.can_destroy()


def test_negotiator_scale_needs_both_directions():
    negotiator = CapabilityNegotiator(
        parse_links({"SCALE_UP": link("POST", f"{APP_URL}/events", required=["event"])})
    )
    assert not negotiator.can_scale()
