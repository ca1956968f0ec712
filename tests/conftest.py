"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

from bookshop.domain.interfaces.base import ILogger, IErrorHandler
from bookshop.domain.models.catalog import Periodical, Publication, RecurrencePeriod
from bookshop.domain.models.configuration import StoreConfiguration
from bookshop.infrastructure.identifiers.allocator import SequentialIdAllocator


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    logger = Mock(spec=ILogger)
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def mock_error_handler():
    """Create a mock error handler for testing."""
    error_handler = Mock(spec=IErrorHandler)
    error_handler.handle_error = Mock(return_value="Error handled")
    error_handler.log_error = Mock()
    error_handler.create_user_message = Mock(return_value="User friendly error")
    return error_handler


@pytest.fixture
def allocator():
    """A fresh identifier allocator, independent per test."""
    return SequentialIdAllocator()


@pytest.fixture
def book():
    return Publication("978-90-01-00001", "C# Basics", "NoorderBoek", Decimal("39.95"))


@pytest.fixture
def weekly_periodical():
    return Periodical("977-12-34-00001", "Dev Weekly", "CodePress", Decimal("6.00"),
                      RecurrencePeriod.WEEKLY)


@pytest.fixture
def monthly_periodical():
    # Price below the minimum; clamps to 5
    return Periodical("977-12-34-00002", "Tech Monthly", "BitHouse", Decimal("3.00"),
                      RecurrencePeriod.MONTHLY)


@pytest.fixture
def sample_store_config():
    return StoreConfiguration()


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary for testing."""
    return {
        'currency_symbol': "$",
        'decimal_separator': ".",
        'thousands_separator': ",",
        'symbol_first': True,
        'symbol_spacing': False,
        'log_level': "DEBUG"
    }


@pytest.fixture(autouse=True)
def clear_env_overrides(monkeypatch):
    """Keep host environment overrides out of configuration tests."""
    for name in ('BOOKSHOP_LOG_LEVEL', 'BOOKSHOP_CURRENCY_SYMBOL', 'BOOKSHOP_LOG_DIR'):
        monkeypatch.delenv(name, raising=False)
