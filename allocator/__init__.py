"""
ORAllocator: operating room allocation engine.
Finds the first free, equipment-compatible room slot for a surgery request,
books it under a per-room lock, and queues requests that cannot be placed.

The engine instance is the single owner of room and queue state.
"""

__version__ = "1.0.0"
