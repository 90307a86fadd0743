"""
Unit Test Fixtures.

Fixtures for unit tests - collaborators are mocked. Storage failures are
simulated by patching the repository; the in-memory database from the
root conftest stands in for the real file.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_confirm() -> AsyncMock:
    """
    Confirmation prompt that answers yes.

    Usage:
        def test_cancel(mock_confirm):
            mock_confirm.return_value = False
    """
    return AsyncMock(return_value=True)


@pytest.fixture
def mock_editor() -> AsyncMock:
    """Editor surface that the user cancels unless told otherwise."""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                # Test code that uses app config
    """
    config = MagicMock()
    config.application.name = "Test Notes"
    config.application.version = "1.0.0"
    config.application.description = "Test application"
    config.application.images.prefer_inline_bytes = False
    config.database.path = ":memory:"
    config.database.echo = False
    return config
