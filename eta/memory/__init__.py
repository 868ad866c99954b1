from eta.memory.tracker import AllocationTracker
from eta.memory.manager import MemoryManager

__all__ = ["AllocationTracker", "MemoryManager"]
