"""
Ordering service - creates, wires and places orders.
"""

from typing import Iterable, List, Optional

from bookshop.domain.interfaces.base import IIdentifierAllocator, ILogger, Observer
from bookshop.domain.models.catalog import Periodical, Publication
from bookshop.domain.models.order import ItemT, Order, OrderFactory, OrderReceipt
from bookshop.domain.services.pricing import AmountFormatter


class OrderingService:
    """Creates orders from one allocator and attaches the default observers to each."""
    
    def __init__(
        self,
        allocator: IIdentifierAllocator,
        logger: ILogger,
        formatter: Optional[AmountFormatter] = None,
        observers: Iterable[Observer] = ()
    ):
        self.logger = logger
        self.factory = OrderFactory(allocator, formatter=formatter, logger=logger)
        self._observers: List[Observer] = list(observers)
    
    def add_observer(self, observer: Observer) -> None:
        """Subscribe an observer to every order created from now on."""
        self._observers.append(observer)
    
    def create_book_order(self, item: ItemT, quantity: int) -> Order[ItemT]:
        order = self.factory.create_order(item, quantity)
        return self._wire(order)
    
    def create_subscription_order(self, periodical: Periodical, quantity: int,
                                  months: int) -> Order[Periodical]:
        order = self.factory.create_subscription(periodical, quantity, months)
        return self._wire(order)
    
    def place(self, order: Order[Publication]) -> OrderReceipt:
        """Place an order and log the outcome."""
        receipt = order.place()
        
        self.logger.info(
            "Order placed",
            component="ordering",
            order_id=order.order_id,
            status=order.status,
            subscription_months=order.subscription_months,
            receipt=receipt
        )
        return receipt
    
    def _wire(self, order: Order) -> Order:
        for observer in self._observers:
            order.placed.subscribe(observer)
        
        self.logger.debug(
            "Order created",
            component="ordering",
            order_id=order.order_id,
            item_identifier=order.item.identifier
        )
        return order
