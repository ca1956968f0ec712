"""
Order entity: a request to buy a quantity of one catalog item.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, NamedTuple, Optional, TypeVar

from bookshop.domain.events.channel import NotificationChannel
from bookshop.domain.exceptions import OrderStateError, ValidationError
from bookshop.domain.interfaces.base import IIdentifierAllocator, ILogger
from bookshop.domain.models.catalog import Periodical, Publication
from bookshop.domain.services.pricing import (
    AmountFormatter, calculate_total, format_amount, is_subscription
)

ItemT = TypeVar('ItemT', bound=Publication)


class OrderStatus(Enum):
    """Order lifecycle status."""
    PENDING = "pending"
    PLACED = "placed"


class OrderReceipt(NamedTuple):
    """Result of placing an order."""
    item_identifier: str
    quantity: int
    total_price: Decimal


class Order(Generic[ItemT]):
    """An order over one catalog item, optionally a recurring subscription.
    
    The identifier is taken from the allocator once, at construction, and is
    read-only afterwards. Observers subscribe to ``placed`` to be told when
    the order is placed.
    """
    
    def __init__(
        self,
        item: ItemT,
        quantity: int,
        allocator: IIdentifierAllocator,
        subscription_months: Optional[int] = None,
        formatter: Optional[AmountFormatter] = None,
        logger: Optional[ILogger] = None
    ):
        self._validate(item, quantity, subscription_months)
        
        self._order_id = allocator.next()
        self.item = item
        self.quantity = quantity
        self.subscription_months = subscription_months
        self.placed_at = datetime.now()
        self.status = OrderStatus.PENDING
        self.formatter = formatter or format_amount
        self.placed = NotificationChannel(logger)
    
    @staticmethod
    def _validate(item: Publication, quantity: int, subscription_months: Optional[int]) -> None:
        """Validate construction preconditions."""
        if not isinstance(item, Publication):
            raise ValidationError(
                f"Item must be a Publication, got {type(item)}", field="item", value=item
            )
        
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("Quantity must be an integer >= 1", field="quantity", value=quantity)
        
        if subscription_months is not None:
            if (isinstance(subscription_months, bool) or not isinstance(subscription_months, int)
                    or subscription_months < 1):
                raise ValidationError(
                    "Subscription months must be an integer >= 1",
                    field="subscription_months",
                    value=subscription_months
                )
            if item.as_periodical() is None:
                raise ValidationError(
                    "Subscriptions are only available for periodicals",
                    field="item",
                    value=item.identifier
                )
    
    @property
    def order_id(self) -> int:
        return self._order_id
    
    @property
    def is_subscription(self) -> bool:
        return is_subscription(self.item, self.subscription_months)
    
    def total_price(self) -> Decimal:
        """Compute the order total; pure and callable at any time."""
        return calculate_total(self.item, self.quantity, self.subscription_months)
    
    def summary(self, total: Decimal) -> str:
        """Human readable placement message."""
        formatted = self.formatter(total)
        periodical = self.item.as_periodical()
        
        if self.subscription_months is not None and periodical is not None:
            return (f"Order #{self.order_id}: subscription to periodical \"{periodical.title}\" "
                    f"({periodical.recurrence.label}), {self.subscription_months} months, "
                    f"{self.quantity} copies per delivery. Total: {formatted}.")
        
        return (f"Order #{self.order_id}: book \"{self.item.title}\" "
                f"(ISBN {self.item.identifier}), quantity {self.quantity}. Total: {formatted}.")
    
    def place(self) -> OrderReceipt:
        """Finalize the order, notify observers and return the receipt."""
        if self.status != OrderStatus.PENDING:
            raise OrderStateError(
                f"Order #{self.order_id} has already been placed", order_id=self.order_id
            )
        
        total = self.total_price()
        receipt = OrderReceipt(self.item.identifier, self.quantity, total)
        
        self.status = OrderStatus.PLACED
        self.placed.publish(self, self.summary(total))
        
        return receipt
    
    def describe(self, date_format: str = "%d-%m-%Y %H:%M") -> str:
        """Order display line."""
        line = (f"[Order #{self.order_id}] {self.item.title} x {self.quantity} "
                f"on {self.placed_at.strftime(date_format)}")
        if self.subscription_months is not None:
            line += f" | Subscription: {self.subscription_months} months"
        return line


class OrderFactory:
    """Constructs orders with identifiers from one injected allocator."""
    
    def __init__(self, allocator: IIdentifierAllocator,
                 formatter: Optional[AmountFormatter] = None,
                 logger: Optional[ILogger] = None):
        self.allocator = allocator
        self.formatter = formatter
        self.logger = logger
    
    def create_order(self, item: ItemT, quantity: int) -> Order[ItemT]:
        """Create a one-off order for any publication."""
        return Order(item, quantity, self.allocator,
                     formatter=self.formatter, logger=self.logger)
    
    def create_subscription(self, periodical: Periodical, quantity: int,
                            months: int) -> Order[Periodical]:
        """Create a subscription order; only periodicals are accepted."""
        return Order(periodical, quantity, self.allocator, subscription_months=months,
                     formatter=self.formatter, logger=self.logger)
