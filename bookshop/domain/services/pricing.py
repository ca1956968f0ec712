"""
Pricing rules for catalog items and orders.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from bookshop.domain.models.catalog import Publication


MIN_PRICE = Decimal("5")
MAX_PRICE = Decimal("50")

Amount = Union[Decimal, int, float, str]
AmountFormatter = Callable[[Decimal], str]


def to_decimal(value: Amount) -> Decimal:
    """Convert a numeric value to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def clamp_price(value: Amount) -> Decimal:
    """Clamp a unit price to the inclusive range [MIN_PRICE, MAX_PRICE].

    NaN has no position in the range and is stored as MIN_PRICE; infinities
    clamp like any other out-of-range value.
    """
    price = to_decimal(value)
    if price.is_nan():
        return MIN_PRICE
    return max(MIN_PRICE, min(MAX_PRICE, price))


def format_amount(amount: Decimal) -> str:
    """Plain two-decimal rendering used when no currency formatter is injected."""
    return f"{amount:.2f}"


def is_subscription(item: 'Publication', subscription_months: Optional[int]) -> bool:
    """True when the order is a recurring subscription on a periodical."""
    return subscription_months is not None and item.as_periodical() is not None


def calculate_total(item: 'Publication', quantity: int,
                    subscription_months: Optional[int] = None) -> Decimal:
    """Compute the total charge for one order.
    
    For subscriptions the quantity is the number of copies per delivery and the
    base amount is scaled by the total number of deliveries over the span.
    """
    total = item.price * quantity
    
    periodical = item.as_periodical()
    if subscription_months is not None and periodical is not None:
        total *= subscription_months * periodical.deliveries_per_month()
    
    return total
