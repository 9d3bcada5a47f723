import pytest
from httpx import Response
from openshift_mcp.core.adapters import (
    AliasCapability,
    CapabilityKind,
    ConnectionAdapter,
    EnvironmentVariableCapability,
    ScalingCapability,
    adapt,
)
from payloads import APP_URL, ENV_URL, application_payload, envelope, env_var_payload


@pytest.mark.asyncio
async def test_full_application_has_every_capability(application):
    service = adapt(application)

    assert service.name == "springeap6"
    assert [c.kind for c in service.capabilities()] == [
        CapabilityKind.ENVIRONMENT_VARIABLES,
        CapabilityKind.CARTRIDGES,
        CapabilityKind.ALIASES,
        CapabilityKind.SCALING,
    ]
    assert isinstance(service.get(CapabilityKind.ALIASES), AliasCapability)
    assert isinstance(service.get(CapabilityKind.SCALING), ScalingCapability)


@pytest.mark.asyncio
async def test_absent_capability_is_none_not_an_error(domain):
    readonly = await domain.get_application_by_name("readonly")
    service = adapt(readonly)

    assert service.get(CapabilityKind.ENVIRONMENT_VARIABLES) is None
    assert service.get(CapabilityKind.SCALING) is None
    assert not service.supports(CapabilityKind.CARTRIDGES)
    assert service.capabilities() == []


@pytest.mark.asyncio
async def test_capabilities_are_fixed_at_adaptation(application, broker):
    service = adapt(application)
    capability = service.get(CapabilityKind.ENVIRONMENT_VARIABLES)
    broker.get(APP_URL).mock(
        return_value=Response(200, json=envelope(application_payload(links={})))
    )

    await application.refresh()

    assert not application.can_update_environment_variables()
    assert service.get(CapabilityKind.ENVIRONMENT_VARIABLES) is capability
    assert adapt(application).capabilities() == []


@pytest.mark.asyncio
async def test_environment_variable_capability_delegates(application, broker):
    broker.get(ENV_URL).mock(
        return_value=Response(200, json=envelope([env_var_payload("FOO", "1")]))
    )
    capability = adapt(application).get(CapabilityKind.ENVIRONMENT_VARIABLES)

    assert isinstance(capability, EnvironmentVariableCapability)
    assert capability.application is application
    assert await capability.list_environment_variables() == {"FOO": "1"}
    assert await capability.get_environment_variable("FOO") == "1"


def test_adapt_rejects_other_resources():
    with pytest.raises(TypeError):
        adapt(object())  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_connection_adapter_lists_projects_and_services(connection, broker):
    adapter = ConnectionAdapter(connection)

    projects = await adapter.get_projects()
    assert [p.name for p in projects] == ["foobarz"]
    assert await adapter.get_projects() is projects

    services = await projects[0].get_services()
    assert [s.name for s in services] == ["springeap6", "readonly", "bare"]
    assert await projects[0].get_services() is services
    assert broker["applications"].call_count == 1
