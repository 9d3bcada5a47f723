import pytest
import pytest_asyncio
import respx
from httpx import Response
from openshift_mcp.core.resources import OpenShiftConnection
from payloads import (
    API_URL,
    APPS_URL,
    CONFIG,
    DOMAINS_URL,
    api_links,
    application_payload,
    bare_application_payload,
    domain_payload,
    envelope,
    readonly_application_payload,
)


@pytest.fixture
def broker():
    """A mocked broker serving the API root, one domain and three applications."""
    with respx.mock(assert_all_called=False) as router:
        router.get(API_URL, name="api").mock(
            return_value=Response(200, json=envelope(api_links(), "links"))
        )
        router.get(DOMAINS_URL, name="domains").mock(
            return_value=Response(200, json=envelope([domain_payload()], "domains"))
        )
        router.get(APPS_URL, name="applications").mock(
            return_value=Response(
                200,
                json=envelope(
                    [
                        application_payload(),
                        readonly_application_payload(),
                        bare_application_payload(),
                    ],
                    "applications",
                ),
            )
        )
        yield router


@pytest_asyncio.fixture
async def connection(broker):
    conn = await OpenShiftConnection.connect(CONFIG)
    yield conn
    await conn.aclose()


@pytest_asyncio.fixture
async def domain(connection):
    return await connection.get_domain("foobarz")


@pytest_asyncio.fixture
async def application(domain):
    return await domain.get_application_by_name("springeap6")
