"""
Domain exceptions and error hierarchy.
"""

from typing import Optional, Dict, Any


class BookshopError(Exception):
    """Base exception for bookshop errors."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(BookshopError):
    """Configuration related errors."""
    pass


class ValidationError(BookshopError):
    """Data validation errors."""
    
    def __init__(self, message: str, field: Optional[str] = None, 
                 value: Optional[Any] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.field = field
        self.value = value


class CatalogError(BookshopError):
    """Catalog lookup and selection errors."""
    
    def __init__(self, message: str, identifier: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.identifier = identifier


class OrderStateError(BookshopError):
    """Order lifecycle errors (e.g., placing an order twice)."""
    
    def __init__(self, message: str, order_id: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.order_id = order_id
