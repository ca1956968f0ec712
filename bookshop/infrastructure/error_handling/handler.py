"""
Error handler implementation with structured logging and fallback handlers.
"""

import traceback
from typing import Dict, Any, Callable
from datetime import datetime

from bookshop.domain.interfaces.base import ILogger
from bookshop.domain.exceptions import (
    BookshopError, ConfigurationError, ValidationError, CatalogError, OrderStateError
)


FallbackHandler = Callable[[Exception, Dict[str, Any]], None]


class ErrorHandler:
    """Logs errors with context and turns them into user-facing messages."""
    
    def __init__(self, logger: ILogger):
        self.logger = logger
        self._fallback_handlers: Dict[type, FallbackHandler] = {}
        self._setup_default_handlers()
    
    def _setup_default_handlers(self) -> None:
        self._fallback_handlers.update({
            ConfigurationError: self._handle_configuration_error,
            ValidationError: self._handle_validation_error,
            OrderStateError: self._handle_order_state_error,
        })
    
    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str:
        """Handle error with logging and return user-friendly message."""
        self.log_error(error, context)
        self._execute_fallback(error, context)
        return self.create_user_message(error)
    
    def log_error(self, error: Exception, context: Dict[str, Any]) -> None:
        """Log error with structured context."""
        error_context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now().isoformat(),
            **context
        }
        
        if error.__traceback__ is not None:
            error_context['traceback'] = ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        
        if isinstance(error, BookshopError):
            error_context.update(error.context)
            
            if isinstance(error, ValidationError):
                error_context.update({
                    'field': error.field,
                    'value': str(error.value) if error.value is not None else None
                })
            elif isinstance(error, CatalogError):
                error_context['identifier'] = error.identifier
            elif isinstance(error, OrderStateError):
                error_context['order_id'] = error.order_id
        
        # Input problems are expected during prompting; anything else is an error
        if isinstance(error, (ValidationError, CatalogError)):
            self.logger.warning("Validation error occurred", **error_context)
        elif isinstance(error, (ConfigurationError, OrderStateError)):
            self.logger.error("Shop error occurred", **error_context)
        else:
            self.logger.error("Unexpected error occurred", **error_context)
    
    def create_user_message(self, error: Exception) -> str:
        """Create user-friendly error message."""
        if isinstance(error, ValidationError):
            return f"  -> {error.message}"
        
        elif isinstance(error, CatalogError):
            return f"  -> Catalog: {error.message}"
        
        elif isinstance(error, OrderStateError):
            return f"Order error: {error.message}"
        
        elif isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}\nPlease check the configuration file."
        
        elif isinstance(error, BookshopError):
            return f"Error: {error.message}"
        
        else:
            return f"Unexpected error: {error}"
    
    def _execute_fallback(self, error: Exception, context: Dict[str, Any]) -> None:
        for exc_type, handler in self._fallback_handlers.items():
            if isinstance(error, exc_type):
                try:
                    handler(error, context)
                except Exception as fallback_error:
                    self.logger.error(
                        "Fallback handler failed",
                        error_type=type(fallback_error).__name__,
                        error_message=str(fallback_error),
                        original_error=str(error)
                    )
                break
    
    def _handle_configuration_error(self, error: ConfigurationError, context: Dict[str, Any]) -> None:
        self.logger.info("Falling back to default configuration values", component="configuration")
    
    def _handle_validation_error(self, error: ValidationError, context: Dict[str, Any]) -> None:
        self.logger.debug(f"Validation failed for field: {error.field}, value: {error.value}")
    
    def _handle_order_state_error(self, error: OrderStateError, context: Dict[str, Any]) -> None:
        self.logger.info(f"Order #{error.order_id} was not placed again", component="ordering")
    
    def add_fallback_handler(self, error_type: type, handler: FallbackHandler) -> None:
        """Add custom fallback handler for specific error type."""
        self._fallback_handlers[error_type] = handler
    
    def remove_fallback_handler(self, error_type: type) -> None:
        """Remove fallback handler for specific error type."""
        self._fallback_handlers.pop(error_type, None)
