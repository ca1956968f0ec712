"""
Synchronous publish/subscribe channel for order placement notifications.
"""

from typing import Any, List, Optional

from bookshop.domain.interfaces.base import ILogger, Observer


class NotificationChannel:
    """Delivers messages to subscribed observers in registration order."""
    
    def __init__(self, logger: Optional[ILogger] = None):
        self.logger = logger
        self._observers: List[Observer] = []
    
    def subscribe(self, observer: Observer) -> Observer:
        """Register an observer; returns it so this can be used as a decorator."""
        if not callable(observer):
            raise TypeError(f"Observer must be callable, got {type(observer)}")
        self._observers.append(observer)
        return observer
    
    def unsubscribe(self, observer: Observer) -> bool:
        """Remove an observer. Returns False if it was not registered."""
        try:
            self._observers.remove(observer)
            return True
        except ValueError:
            return False
    
    def clear(self) -> None:
        """Remove all observers."""
        self._observers.clear()
    
    def publish(self, source: Any, message: str) -> int:
        """Invoke every observer with (source, message) and return the number of invocations."""
        delivered = 0
        
        # Snapshot so observers may unsubscribe themselves while being notified
        for observer in list(self._observers):
            delivered += 1
            try:
                observer(source, message)
            except Exception as e:
                if self.logger:
                    self.logger.error(
                        f"Notification observer failed: {e}",
                        component="notifications",
                        observer=getattr(observer, '__name__', repr(observer)),
                        error_type=type(e).__name__
                    )
        
        return delivered
    
    def __len__(self) -> int:
        return len(self._observers)
