import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets the environment before the domain module is imported, so logging
    is configured for tests (console only, no log files).
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["BACKOFFICE_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def backoffice_bed():
    from backoffice.domain import backoffice

    bed = DomainFixture(backoffice)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(backoffice_bed):
    with backoffice_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Seed data shared by the application, integration and BDD suites
# ---------------------------------------------------------------------------
ADMIN_EMAIL = "admin@insophinia.test"
MANAGER_EMAIL = "manager@insophinia.test"
STAFF_EMAIL = "staff@insophinia.test"
PASSWORD = "s3cret-pass"


@pytest.fixture
def gateway():
    from backoffice.discount.discount import Discount, DiscountCondition
    from backoffice.gateway.fake_adapter import FakeGateway
    from backoffice.inventory.item import InventoryItem
    from backoffice.user.user import User

    gateway = FakeGateway()
    gateway.seed_user(User(id="user-admin", name="Ada Admin", email=ADMIN_EMAIL, role="Admin"), PASSWORD)
    gateway.seed_user(User(id="user-manager", name="Max Manager", email=MANAGER_EMAIL, role="Manager"), PASSWORD)
    gateway.seed_user(User(id="user-staff", name="Sam Staff", email=STAFF_EMAIL, role="Staff"), PASSWORD)
    gateway.seed_inventory(
        InventoryItem(
            id="inv-lamp", name="Desk Lamp", sku="LAMP01", quantity=5, threshold=4, price=20.0, category="Lighting"
        ),
        InventoryItem(
            id="inv-chair", name="Office Chair", sku="CHAIR01", quantity=10, threshold=2, price=30.0, category="Furniture"
        ),
        InventoryItem(
            id="inv-cable", name="USB Cable", sku="CABLE01", quantity=2, threshold=5, price=5.0, category="Accessories"
        ),
    )
    gateway.seed_discounts(
        Discount(
            id="disc-spend50",
            code="SPEND50",
            description="10% off orders over $50",
            discount_type="Percentage",
            value=10.0,
            condition=DiscountCondition(min_spend=50.0),
        ),
        Discount(
            id="disc-twoitems",
            code="TWOITEMS",
            description="15% off two or more items",
            discount_type="Percentage",
            value=15.0,
            condition=DiscountCondition(min_items=2),
        ),
    )
    return gateway


@pytest.fixture
def settings():
    from backoffice.config import BackofficeSettings

    return BackofficeSettings(liveness_interval=0.01, logout_grace=0.05, activity_interval=0.05)


@pytest.fixture
def customer():
    return {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "contact": "555-0100",
        "address": "1 Harbor Way, Arlington",
    }


@pytest.fixture
async def engine(gateway, settings):
    from backoffice.engine import Backoffice

    engine = Backoffice(gateway, settings)
    assert await engine.login(ADMIN_EMAIL, PASSWORD)
    yield engine
    await engine.close()
