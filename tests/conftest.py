import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

# Domain-context fixtures are autouse and function-scoped; property tests never mutate them.
settings.register_profile("storefront", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "storefront"))


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets PROTEAN_ENV so that domain configuration and log levels follow the test overlay.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_quote_service():
    """Drop the cached quote service so environment overrides apply per test."""
    yield

    from shipping.quote import reset_quote_service

    reset_quote_service()
