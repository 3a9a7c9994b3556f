import pytest


def pytest_collection_modifyitems(items):
    """Mark every test collected under tests/integration as an integration test."""
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)
