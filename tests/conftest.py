# Shared fixtures for the focuskit test suite.
#
# Qt runs on the offscreen platform so the adapter tests need no display;
# pytest-qt provides the ``qtbot`` fixture.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from focuskit.design.walkthrough_steps import clear_walkthroughs  # noqa: E402
from focuskit.services.scheduler import ManualScheduler  # noqa: E402
from focuskit.services.service_locator import services  # noqa: E402


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture(autouse=True)
def _isolate_registries():
    yield
    clear_walkthroughs()
    logging_service = services.try_get("logging_service")
    if logging_service is not None:
        logging_service.detach()
    services.clear()
