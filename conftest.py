"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

Each test runs against a fresh in-memory SQLite database opened through the
same :class:`Database` object the application uses. Requests go through
``httpx.AsyncClient`` with an ASGI transport, so the app and the database
share the test's event loop and the production lifespan never runs.

Key Fixtures:
- `initialize_test_db`: (autouse) Creates a fresh DB schema and seed users for each test.
- `app_for_testing`: The FastAPI application wired to the test database.
- `client`: A non-authenticated AsyncClient.
- `reseller_token` / `reseller_client`: A reseller who owns the fixture store.
- `storeless_reseller_client`: A reseller without a store.
- `customer_token`: A customer, who must be rejected by reseller endpoints.
- `order_factory`: Creates orders (and line items) for the fixture reseller.
"""

import datetime
import itertools
from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from tortoise.backends.base.client import BaseDBAsyncClient

from reseller_hub.core.database import Database, build_tortoise_config
from reseller_hub.features.auth.models import User, UserRole
from reseller_hub.features.auth.security import get_password_hash
from reseller_hub.features.catalog.models import Product
from reseller_hub.features.orders.models import Order, OrderItem, OrderStatus
from reseller_hub.features.stores.models import Store, default_store_settings
from reseller_hub.main import create_app

RESELLER_USERNAME = "resellerfixture"
RESELLER_PASSWORD = "resellerpassword123"
STORELESS_USERNAME = "storelessreseller"
STORELESS_PASSWORD = "storelesspassword123"
CUSTOMER_USERNAME = "customerfixture"
CUSTOMER_PASSWORD = "customerpassword123"

FIXTURE_STORE_SETTINGS = {
    "minimumMarkup": 5,
    "maximumMarkup": 50,
    "defaultMarkup": 20,
    "notifyByEmail": False,
}


async def add_user(username: str, password: str, role: UserRole, **extra) -> User:
    return await User.create(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(password),
        role=role,
        **extra,
    )


async def add_fixture_store(reseller: User) -> Store:
    settings = default_store_settings()
    settings.update(FIXTURE_STORE_SETTINGS)
    return await Store.create(reseller=reseller, name="Fixture Store", settings=settings)


async def login(client: AsyncClient, username: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token", data={"username": username, "password": password}
    )
    if response.status_code != 200:
        raise Exception(f"Could not get token for {username}: {response.text}")
    return response.json()["access_token"]


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db(request: pytest.FixtureRequest) -> AsyncGenerator[Optional[Database], None]:
    """
    Initializes the database for each test function.

    Creates a fresh in-memory database and schema, seeds the fixture users and
    the fixture reseller's store, and closes the connections afterwards.
    Tests marked ``no_test_db`` skip all of this.
    """
    if request.node.get_closest_marker("no_test_db"):
        yield None
        return

    database = Database(build_tortoise_config("sqlite://:memory:"))
    await database.connect(generate_schemas=True)

    reseller = await add_user(RESELLER_USERNAME, RESELLER_PASSWORD, UserRole.RESELLER)
    await add_fixture_store(reseller)
    await add_user(STORELESS_USERNAME, STORELESS_PASSWORD, UserRole.RESELLER)
    await add_user(CUSTOMER_USERNAME, CUSTOMER_PASSWORD, UserRole.CUSTOMER)

    yield database

    await database.disconnect()


@pytest.fixture
def db_conn(initialize_test_db: Database) -> BaseDBAsyncClient:
    return initialize_test_db.connection()


@pytest.fixture
def app_for_testing(initialize_test_db: Database) -> FastAPI:
    return create_app(database=initialize_test_db)


@pytest_asyncio.fixture
async def client(app_for_testing: FastAPI) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provides a non-authenticated AsyncClient.
    """
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def reseller_user() -> User:
    return await User.get(username=RESELLER_USERNAME)


@pytest_asyncio.fixture
async def storeless_reseller_user() -> User:
    return await User.get(username=STORELESS_USERNAME)


@pytest_asyncio.fixture
async def customer_user() -> User:
    return await User.get(username=CUSTOMER_USERNAME)


@pytest_asyncio.fixture
async def reseller_token(client: AsyncClient) -> str:
    return await login(client, RESELLER_USERNAME, RESELLER_PASSWORD)


@pytest_asyncio.fixture
async def customer_token(client: AsyncClient) -> str:
    return await login(client, CUSTOMER_USERNAME, CUSTOMER_PASSWORD)


@pytest_asyncio.fixture
async def reseller_client(app_for_testing: FastAPI, client: AsyncClient) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provides an AsyncClient authenticated as the reseller who owns the fixture store.
    """
    token = await login(client, RESELLER_USERNAME, RESELLER_PASSWORD)
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers(token)) as ac:
        yield ac


@pytest_asyncio.fixture
async def storeless_reseller_client(app_for_testing: FastAPI, client: AsyncClient) -> AsyncGenerator[AsyncClient, Any]:
    token = await login(client, STORELESS_USERNAME, STORELESS_PASSWORD)
    transport = ASGITransport(app=app_for_testing)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers(token)) as ac:
        yield ac


_UNSET = object()


@pytest_asyncio.fixture
async def order_factory(reseller_user: User, customer_user: User):
    """A factory creating orders sold by the fixture reseller.

    ``items`` is a list of ``(product, quantity, unit_price)`` tuples.
    """
    numbers = itertools.count(1)

    async def _factory(
        total: float,
        cost: float = 0.0,
        status: OrderStatus = OrderStatus.COMPLETED,
        created_at: datetime.datetime = None,
        customer: User = None,
        reseller: Any = _UNSET,
        items: list[tuple[Product, int, float]] = (),
    ) -> Order:
        order = await Order.create(
            order_number=f"ORD-{next(numbers):05d}",
            customer=customer or customer_user,
            reseller=reseller_user if reseller is _UNSET else reseller,
            total=total,
            cost=cost,
            status=status,
            created_at=created_at or datetime.datetime.now(datetime.timezone.utc),
        )
        for product, quantity, price in items:
            await OrderItem.create(
                order=order,
                product=product,
                quantity=quantity,
                price=price,
                sub_product_name=f"{product.title} - standard",
            )
        return order

    return _factory


@pytest_asyncio.fixture
async def product_factory():
    async def _factory(title: str, base_price: float = 10.0) -> Product:
        return await Product.create(title=title, base_price=base_price)

    return _factory
