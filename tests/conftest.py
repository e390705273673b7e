"""
Root pytest configuration for infisical-secrets-action.
"""

import pytest

from infisical_action.config.logging import bootstrap_logging, clear_masks

# Bootstrap logging for all tests
bootstrap_logging()


@pytest.fixture(autouse=True)
def isolated_masks():
    """Registered secret masks never leak from one test to the next."""
    clear_masks()
    yield
    clear_masks()
