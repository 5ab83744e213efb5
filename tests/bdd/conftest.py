"""Shared BDD fixtures and step definitions for the back office.

pytest-bdd steps are synchronous, so each scenario drives the engine on
an event loop of its own.
"""

import asyncio

import pytest
from pytest_bdd import given, parsers, then

from backoffice.config import BackofficeSettings
from backoffice.engine import Backoffice

ADMIN_EMAIL = "admin@insophinia.test"
PASSWORD = "s3cret-pass"


@pytest.fixture()
def loop():
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture()
def run(loop):
    return loop.run_until_complete


@pytest.fixture()
def backoffice_app(gateway, run):
    # Timers long enough that they never fire between steps
    app = Backoffice(gateway, BackofficeSettings(liveness_interval=60, logout_grace=60, activity_interval=60))
    yield app
    run(app.close())


@pytest.fixture()
def outcome():
    """Container for what a When step produced."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a signed-in administrator")
def signed_in_administrator(backoffice_app, run):
    assert run(backoffice_app.login(ADMIN_EMAIL, PASSWORD))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the notice "{message}" is shown'))
def notice_is_shown(backoffice_app, message):
    assert message in [entry.message for entry in backoffice_app.notifications]
