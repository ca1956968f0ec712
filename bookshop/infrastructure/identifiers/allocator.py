"""
Order identifier allocation.
"""

import threading


class SequentialIdAllocator:
    """Hands out 1, 2, 3, ... with no repeats.
    
    Each allocator is an independent counter; share one instance between
    everything that constructs orders within a run.
    """
    
    def __init__(self):
        self._current = 0
        self._lock = threading.Lock()
    
    def next(self) -> int:
        """Return the next identifier."""
        with self._lock:
            self._current += 1
            return self._current
