"""Pytest configuration for eke-kubectl unit tests."""

from typing import Any

from hypothesis import settings

# property tests run under the tier(1) timeout
settings.register_profile("unit", max_examples=50, deadline=None)
settings.load_profile("unit")


def pytest_configure(config: Any) -> None:
    """Register custom markers for unit tests."""
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )
