"""
Unit tests for the ordering service.
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock

from bookshop.application.services.ordering import OrderingService
from bookshop.domain.exceptions import OrderStateError
from bookshop.domain.models.order import OrderReceipt, OrderStatus
from bookshop.infrastructure.identifiers.allocator import SequentialIdAllocator


@pytest.fixture
def service(mock_logger):
    return OrderingService(SequentialIdAllocator(), mock_logger)


class TestOrderingService:
    """Test OrderingService."""
    
    def test_three_orders_get_sequential_identifiers(self, service, book, weekly_periodical):
        orders = [
            service.create_book_order(book, 1),
            service.create_subscription_order(weekly_periodical, 2, 3),
            service.create_book_order(weekly_periodical, 1),
        ]
        assert [o.order_id for o in orders] == [1, 2, 3]
    
    def test_place_book_order(self, service, book, mock_logger):
        order = service.create_book_order(book, 3)
        
        receipt = service.place(order)
        
        assert receipt == OrderReceipt("978-90-01-00001", 3, Decimal("119.85"))
        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args == ("Order placed",)
        assert kwargs['order_id'] == 1
        assert kwargs['status'] is OrderStatus.PLACED
        assert kwargs['receipt'] is receipt
        assert kwargs['component'] == "ordering"
    
    def test_place_subscription_order(self, service, weekly_periodical):
        order = service.create_subscription_order(weekly_periodical, 2, 3)
        assert service.place(order).total_price == Decimal("144.00")
    
    def test_default_observers_are_attached_to_each_order(self, mock_logger, book):
        observer = Mock()
        service = OrderingService(SequentialIdAllocator(), mock_logger, observers=[observer])
        
        service.place(service.create_book_order(book, 1))
        service.place(service.create_book_order(book, 2))
        
        assert observer.call_count == 2
        assert observer.call_args_list[1].args[1].startswith("Order #2: book")
    
    def test_add_observer_applies_to_later_orders(self, service, book):
        earlier = service.create_book_order(book, 1)
        observer = Mock()
        service.add_observer(observer)
        later = service.create_book_order(book, 1)
        
        service.place(earlier)
        service.place(later)
        
        observer.assert_called_once()
        assert observer.call_args.args[0] is later
    
    def test_formatter_is_used_in_messages(self, mock_logger, book):
        observer = Mock()
        service = OrderingService(SequentialIdAllocator(), mock_logger,
                                  formatter=lambda amount: f"<{amount}>", observers=[observer])
        
        service.place(service.create_book_order(book, 1))
        
        assert observer.call_args.args[1].endswith("Total: <39.95>.")
    
    def test_placing_twice_raises(self, service, book, mock_logger):
        order = service.create_book_order(book, 1)
        service.place(order)
        
        with pytest.raises(OrderStateError):
            service.place(order)
        
        assert mock_logger.info.call_count == 1
