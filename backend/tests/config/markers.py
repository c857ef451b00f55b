"""
Pytest markers and collection hooks for the fincontrol test suite.

Markers are registered here and attached automatically from the test file
location, so a test only needs explicit marks for cross-cutting concerns.
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "auth: mark test as authentication-related")
    config.addinivalue_line("markers", "security: mark test as security-related")
    config.addinivalue_line("markers", "controllers: mark test as controller-related")
    config.addinivalue_line("markers", "database: mark test as database-related")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "validation: mark test as form validation test")
    config.addinivalue_line("markers", "invoice: mark test as invoice-related")
    config.addinivalue_line("markers", "customer: mark test as customer-related")
    config.addinivalue_line("markers", "user: mark test as user-related")
    config.addinivalue_line("markers", "logging: mark test as logging-related")


def pytest_collection_modifyitems(config, items):
    """Modify test items during collection."""
    for item in items:
        path = str(item.fspath)

        # Add markers based on test file location
        if "unit" in path:
            item.add_marker(pytest.mark.unit)

        if "integration" in path:
            item.add_marker(pytest.mark.integration)

        if "auth" in path or "auth" in item.name:
            item.add_marker(pytest.mark.auth)

        if "controller" in path or "flow" in path:
            item.add_marker(pytest.mark.controllers)

        if "service" in path:
            item.add_marker(pytest.mark.services)

        if "repo" in path:
            item.add_marker(pytest.mark.repositories)
            item.add_marker(pytest.mark.database)

        if "validation" in path:
            item.add_marker(pytest.mark.validation)


@pytest.fixture
def response_helper():
    """Simple response helper for integration tests."""

    class ResponseHelper:
        @staticmethod
        def assert_html_response(response, expected_status=200):
            assert response.status_code == expected_status
            return response.get_data(as_text=True)

        @staticmethod
        def assert_json_response(response, expected_status=200):
            assert response.status_code == expected_status
            return response.get_json()

        @staticmethod
        def assert_redirect_response(response):
            assert response.status_code in (301, 302, 303, 307, 308)
            return response.headers.get("Location")

    return ResponseHelper()
