"""
Locale style currency rendering.
"""

from decimal import Decimal, ROUND_HALF_UP

from bookshop.domain.models.configuration import StoreConfiguration
from bookshop.domain.services.pricing import Amount, to_decimal

_CENT = Decimal("0.01")


class CurrencyFormatter:
    """Renders amounts as e.g. ``€ 1.234,50`` according to the store configuration."""
    
    def __init__(self, config: StoreConfiguration):
        self.config = config
    
    def format(self, amount: Amount) -> str:
        value = to_decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        
        units, cents = f"{abs(value):.2f}".split(".")
        groups = []
        while len(units) > 3:
            groups.insert(0, units[-3:])
            units = units[:-3]
        groups.insert(0, units)
        
        number = f"{self.config.thousands_separator.join(groups)}{self.config.decimal_separator}{cents}"
        space = " " if self.config.symbol_spacing else ""
        
        if self.config.symbol_first:
            return f"{sign}{self.config.currency_symbol}{space}{number}"
        return f"{sign}{number}{space}{self.config.currency_symbol}"
    
    def __call__(self, amount: Amount) -> str:
        return self.format(amount)
