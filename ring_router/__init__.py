from ring_router.consistent_hash import ConsistentHashRing

__all__ = ['ConsistentHashRing']
