"""Storage adapters - Implementations of SegmentRepositoryPort.

Available implementations:
- InMemorySegmentRepository: Thread-safe dict-backed repository
"""

from .memory_repository import InMemorySegmentRepository

__all__ = ["InMemorySegmentRepository"]
