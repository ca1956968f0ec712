"""
Protocol interfaces for the domain layer.
"""

from typing import Any, Callable, Dict, Protocol


# Observer signature for placement notifications: (source, message) -> None
Observer = Callable[[Any, str], None]


class ILogger(Protocol):
    """Logger interface for dependency injection."""
    
    def debug(self, message: str, **kwargs: Any) -> None: ...
    def info(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def critical(self, message: str, **kwargs: Any) -> None: ...


class IErrorHandler(Protocol):
    """Error handling interface."""
    
    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str: ...
    def log_error(self, error: Exception, context: Dict[str, Any]) -> None: ...
    def create_user_message(self, error: Exception) -> str: ...


class IIdentifierAllocator(Protocol):
    """Issues unique, strictly increasing order identifiers."""
    
    def next(self) -> int: ...
