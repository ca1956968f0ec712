"""
Unit tests for currency formatting.
"""

import pytest
from decimal import Decimal

from bookshop.domain.models.configuration import StoreConfiguration
from bookshop.infrastructure.formatting.currency import CurrencyFormatter


class TestCurrencyFormatter:
    """Test CurrencyFormatter."""
    
    @pytest.mark.parametrize("amount, expected", [
        (Decimal("119.85"), "€ 119,85"),
        (Decimal("144"), "€ 144,00"),
        (Decimal("1234.5"), "€ 1.234,50"),
        (Decimal("1234567.891"), "€ 1.234.567,89"),
        (Decimal("0.005"), "€ 0,01"),
        (Decimal("-5"), "-€ 5,00"),
        (39.95, "€ 39,95"),
    ])
    def test_default_nl_be_style(self, sample_store_config, amount, expected):
        assert CurrencyFormatter(sample_store_config).format(amount) == expected
    
    def test_symbol_after_amount(self):
        config = StoreConfiguration(symbol_first=False)
        assert CurrencyFormatter(config)(Decimal("10")) == "10,00 €"
    
    def test_custom_configuration(self, sample_config_dict):
        formatter = CurrencyFormatter(StoreConfiguration.from_dict(sample_config_dict))
        assert formatter(Decimal("1234.5")) == "$1,234.50"
    
    def test_empty_thousands_separator(self):
        config = StoreConfiguration(thousands_separator="")
        assert CurrencyFormatter(config)(Decimal("1234.5")) == "€ 1234,50"
