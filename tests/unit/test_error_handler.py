"""
Unit tests for the error handler.
"""

import pytest
from unittest.mock import Mock

from bookshop.domain.exceptions import (
    BookshopError, CatalogError, ConfigurationError, OrderStateError, ValidationError
)
from bookshop.infrastructure.error_handling.handler import ErrorHandler


class TestBookshopError:
    
    def test_str_includes_context(self):
        error = BookshopError("Something failed", context={'order_id': 3})
        assert str(error) == "Something failed (Context: order_id=3)"
    
    def test_str_without_context(self):
        assert str(BookshopError("plain")) == "plain"


class TestErrorHandler:
    """Test ErrorHandler."""
    
    @pytest.mark.parametrize("error, expected", [
        (ValidationError("Enter a whole number."), "  -> Enter a whole number."),
        (CatalogError("No items found."), "  -> Catalog: No items found."),
        (OrderStateError("Order #1 has already been placed"), "Order error: Order #1 has already been placed"),
        (BookshopError("generic"), "Error: generic"),
        (KeyError("x"), "Unexpected error: 'x'"),
    ])
    def test_create_user_message(self, mock_logger, error, expected):
        assert ErrorHandler(mock_logger).create_user_message(error) == expected
    
    def test_configuration_message(self, mock_logger):
        message = ErrorHandler(mock_logger).create_user_message(ConfigurationError("bad level"))
        assert message.startswith("Configuration error: bad level")
    
    def test_validation_errors_log_as_warning(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        
        handler.log_error(ValidationError("bad", field="quantity", value=0), {'prompt': "Quantity: "})
        
        mock_logger.warning.assert_called_once()
        context = mock_logger.warning.call_args.kwargs
        assert context['field'] == "quantity"
        assert context['value'] == "0"
        assert context['prompt'] == "Quantity: "
        assert context['error_type'] == "ValidationError"
    
    def test_order_state_errors_log_as_error(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        
        handler.log_error(OrderStateError("placed twice", order_id=4), {})
        
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs['order_id'] == 4
    
    def test_unexpected_errors_include_traceback(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        
        try:
            raise RuntimeError("kaput")
        except RuntimeError as e:
            handler.log_error(e, {'component': "tests"})
        
        context = mock_logger.error.call_args.kwargs
        assert "RuntimeError: kaput" in context['traceback']
        assert context['component'] == "tests"
    
    def test_handle_error_returns_user_message(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        message = handler.handle_error(CatalogError("Unknown ISBN", identifier="x"), {})
        assert message == "  -> Catalog: Unknown ISBN"
    
    def test_custom_fallback_handler(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        fallback = Mock()
        handler.add_fallback_handler(CatalogError, fallback)
        error = CatalogError("missing")
        
        handler.handle_error(error, {'step': 1})
        
        fallback.assert_called_once_with(error, {'step': 1})
    
    def test_failing_fallback_is_logged(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        handler.add_fallback_handler(CatalogError, Mock(side_effect=RuntimeError("nope")))
        
        message = handler.handle_error(CatalogError("missing"), {})
        
        assert message == "  -> Catalog: missing"
        assert any(c.args[0] == "Fallback handler failed" for c in mock_logger.error.call_args_list)
    
    def test_remove_fallback_handler(self, mock_logger):
        handler = ErrorHandler(mock_logger)
        fallback = Mock()
        handler.add_fallback_handler(CatalogError, fallback)
        handler.remove_fallback_handler(CatalogError)
        
        handler.handle_error(CatalogError("missing"), {})
        
        fallback.assert_not_called()
