import json

import pytest
import respx
from httpx import Response
from openshift_mcp.core.client import OpenShiftClient, RetryConfig
from openshift_mcp.core.errors import (
    DuplicateResourceError,
    OpenShiftHTTPError,
    UnsupportedOperationError,
)
from openshift_mcp.core.resources import Application, Domain, OpenShiftConnection, connect
from payloads import (
    API_URL,
    APPS_URL,
    CONFIG,
    DOMAIN_URL,
    DOMAINS_URL,
    REST,
    SERVER,
    api_links,
    application_payload,
    domain_payload,
    envelope,
    link,
)


@pytest.mark.asyncio
async def test_connect_reads_api_links(connection, broker):
    assert connection.identity_key == SERVER
    assert connection.has_link("LIST_DOMAINS")
    assert connection.has_link("ADD_DOMAIN")
    assert len(broker.calls) == 1


@pytest.mark.asyncio
async def test_connect_helper_accepts_injected_client():
    async with respx.mock:
        respx.get(API_URL).mock(return_value=Response(200, json=envelope(api_links(), "links")))
        client = OpenShiftClient.from_config(CONFIG, retry=RetryConfig(max_retries=0))

        async with await connect(CONFIG, client=client) as connection:
            assert connection.client is client
            assert connection.server == SERVER


@pytest.mark.asyncio
async def test_connect_propagates_auth_failure():
    async with respx.mock:
        respx.get(API_URL).mock(return_value=Response(401, json={"status": "unauthorized"}))
        with pytest.raises(OpenShiftHTTPError) as exc:
            await OpenShiftConnection.connect(CONFIG)
        assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_domains_are_loaded_once(connection, broker):
    domains = await connection.get_domains()
    again = await connection.get_domains()

    assert again is domains
    assert domains.keys() == ["foobarz"]
    domain = domains.get("foobarz")
    assert isinstance(domain, Domain)
    assert domain.suffix == "rhcloud.com"
    assert domain.connection is connection
    assert broker["domains"].call_count == 1


@pytest.mark.asyncio
async def test_get_user(connection, broker):
    broker.get(f"{REST}/user").mock(
        return_value=Response(
            200,
            json=envelope(
                {"id": "u1", "login": "dev@example.com", "consumed_gears": 2, "max_gears": 3},
                "user",
            ),
        )
    )

    user = await connection.get_user()

    assert user.login == "dev@example.com"
    assert user.consumed_gears == 2
    assert user.max_gears == 3


@pytest.mark.asyncio
async def test_create_domain_adds_to_cache(connection, broker):
    route = broker.post(DOMAINS_URL).mock(
        return_value=Response(201, json=envelope(domain_payload("newdomain"), "domain"))
    )
    await connection.get_domains()

    created = await connection.create_domain("newdomain")

    assert json.loads(route.calls[0].request.content) == {"name": "newdomain"}
    assert created.id == "newdomain"
    assert await connection.get_domain("newdomain") is created


@pytest.mark.asyncio
async def test_create_existing_domain_is_rejected_before_request(connection, broker):
    route = broker.post(DOMAINS_URL).mock(return_value=Response(201))
    with pytest.raises(DuplicateResourceError):
        await connection.create_domain("foobarz")
    assert not route.called


@pytest.mark.asyncio
async def test_refresh_keeps_domain_references(connection, broker):
    domain = await connection.get_domain("foobarz")

    await connection.refresh()
    refreshed = await connection.get_domain("foobarz")

    assert refreshed is domain
    # API root and domain list fetched twice each
    assert len(broker.calls) == 4


@pytest.mark.asyncio
async def test_connection_without_domain_listing():
    async with respx.mock:
        route = respx.get(API_URL).mock(
            return_value=Response(
                200, json=envelope({"API": link("GET", API_URL)}, "links")
            )
        )
        async with await connect(CONFIG) as connection:
            domains = await connection.get_domains()
            assert domains.unsupported
            assert len(domains) == 0
            with pytest.raises(UnsupportedOperationError):
                await connection.create_domain("newdomain")
            with pytest.raises(UnsupportedOperationError):
                await connection.get_user()

        assert route.call_count == 1


@pytest.mark.asyncio
async def test_domain_applications(domain):
    applications = await domain.get_applications()

    assert applications.keys() == ["springeap6", "readonly", "bare"]
    assert await domain.has_application_named("readonly")
    assert not await domain.has_application_named("missing")
    app = await domain.get_application_by_name("springeap6")
    assert isinstance(app, Application)
    assert app.domain is domain
    assert app.uuid == "uuid-springeap6"
    assert app.application_url == "http://springeap6-foobarz.rhcloud.com/"


@pytest.mark.asyncio
async def test_create_application_posts_cartridge_and_options(domain, broker):
    route = broker.post(APPS_URL).mock(
        return_value=Response(
            201,
            json=envelope(
                application_payload("newapp", framework="php-5.3", scalable=False)
            ),
        )
    )

    app = await domain.create_application(
        "newapp", "php-5.3", gear_profile="small", environment_variables={"A": "1"}
    )

    assert json.loads(route.calls[0].request.content) == {
        "name": "newapp",
        "cartridges": [{"name": "php-5.3"}],
        "scale": False,
        "gear_size": "small",
        "environment_variables": [{"name": "A", "value": "1"}],
    }
    assert app.framework == "php-5.3"
    assert await domain.get_application_by_name("newapp") is app


@pytest.mark.asyncio
async def test_create_duplicate_application_is_rejected(domain, broker):
    route = broker.post(APPS_URL).mock(return_value=Response(201))
    with pytest.raises(DuplicateResourceError):
        await domain.create_application("springeap6", "jbosseap-6")
    assert not route.called


@pytest.mark.asyncio
async def test_destroy_domain_forgets_it(connection, broker):
    domain = await connection.get_domain("foobarz")
    route = broker.delete(DOMAIN_URL).mock(
        return_value=Response(200, json=envelope(None, None))
    )

    await domain.destroy(force=True)

    assert route.calls[0].request.url.params["force"] == "true"
    assert await connection.get_domain("foobarz") is None
