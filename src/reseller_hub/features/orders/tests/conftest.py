import pytest_asyncio

from reseller_hub.features.catalog.models import Product


@pytest_asyncio.fixture
async def default_product() -> Product:
    """A catalog product that can be used in order tests."""
    return await Product.create(title="Default Product", base_price=12.5)
