"""
Catalog entities: publications and periodicals.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from bookshop.domain.exceptions import ValidationError
from bookshop.domain.services.pricing import (
    Amount, AmountFormatter, clamp_price, format_amount
)


class RecurrencePeriod(Enum):
    """How often a periodical appears."""
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    
    @property
    def label(self) -> str:
        return self.name.capitalize()
    
    @classmethod
    def from_menu_choice(cls, choice: int) -> 'RecurrencePeriod':
        """Create RecurrencePeriod from the 1-3 menu value."""
        try:
            return cls(choice)
        except ValueError:
            raise ValidationError(
                f"Invalid recurrence choice: {choice}. Valid options: {[p.value for p in cls]}",
                field="recurrence",
                value=choice
            )


_DELIVERIES_PER_MONTH = {
    RecurrencePeriod.DAILY: 30,
    RecurrencePeriod.WEEKLY: 4,
    RecurrencePeriod.MONTHLY: 1,
}


def _require_text(field: str, value: str) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string", field=field, value=value)
    return value.strip()


class Publication:
    """A sellable catalog entry whose price always stays within bounds."""
    
    kind_label = "Book"
    
    def __init__(self, identifier: str, title: str, publisher: str, price: Amount):
        self.identifier = _require_text("identifier", identifier)
        self.title = _require_text("title", title)
        self.publisher = _require_text("publisher", publisher)
        self.price = price
    
    @property
    def price(self) -> Decimal:
        return self._price
    
    @price.setter
    def price(self, value: Amount) -> None:
        # Out-of-range prices are clamped, never rejected.
        self._price = clamp_price(value)
    
    def as_periodical(self) -> Optional['Periodical']:
        """Capability query used by pricing; plain publications are not periodicals."""
        return None
    
    def describe(self, formatter: Optional[AmountFormatter] = None) -> str:
        """Catalog display line."""
        formatter = formatter or format_amount
        return (f"[{self.kind_label}] {self.title} (ISBN: {self.identifier}), "
                f"Publisher: {self.publisher}, Price: {formatter(self.price)}")
    
    def __repr__(self) -> str:
        return (f"{type(self).__name__}(identifier={self.identifier!r}, "
                f"title={self.title!r}, price={self.price!r})")


class Periodical(Publication):
    """A publication that appears on a fixed recurrence period."""
    
    kind_label = "Periodical"
    
    def __init__(self, identifier: str, title: str, publisher: str, price: Amount,
                 recurrence: RecurrencePeriod):
        super().__init__(identifier, title, publisher, price)
        if not isinstance(recurrence, RecurrencePeriod):
            raise ValidationError(
                f"Recurrence must be a RecurrencePeriod enum, got {type(recurrence)}",
                field="recurrence",
                value=recurrence
            )
        self.recurrence = recurrence
    
    def as_periodical(self) -> Optional['Periodical']:
        return self
    
    def deliveries_per_month(self) -> int:
        """Number of deliveries in one month of subscription."""
        return _DELIVERIES_PER_MONTH.get(self.recurrence, 1)
    
    def describe(self, formatter: Optional[AmountFormatter] = None) -> str:
        return f"{super().describe(formatter)}, Period: {self.recurrence.label}"
