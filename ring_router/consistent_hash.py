"""
    Consistent hashing ring

    Keys and nodes are hashed onto the same integer line. Each node gets
    `replicas` virtual positions; a key belongs to the node owning the first
    position at or after the key's hash, wrapping around to the smallest
    position when the key hashes past every node.
"""

import bisect
import logging
import zlib

logger = logging.getLogger(__name__)


class ConsistentHashRing(object):
    """
        Sorted list of virtual positions plus a position -> node lookup.
        Not thread safe, callers that share a ring must lock around it.
    """
    def __init__(self, replicas, hash_fn=None):
        if hash_fn is None:
            hash_fn = zlib.crc32

        self.replicas = replicas
        self.hash_fn = hash_fn
        self._positions = []        # sorted virtual positions
        self._owners = {}           # virtual position -> node label

    def __len__(self):
        return len(self._positions)

    def __contains__(self, node):
        return node in self._owners.values()

    def _hash(self, value):
        return self.hash_fn(value.encode('utf-8'))

    def add(self, *nodes):
        """
        Method used to place nodes on the ring. Every node gets one
        position per replica, hashed from the label with the replica
        index appended.
        :param nodes: node labels to add
        :return None:
        """
        for node in nodes:
            for i in range(self.replicas):
                position = self._hash(node + str(i))
                self._positions.append(position)
                self._owners[position] = node

        self._positions.sort()
        logger.debug('Added %s, ring holds %d positions', list(nodes), len(self._positions))

    def remove(self, node):
        """
        Method used to take a node off the ring
        :param node: node label to remove
        :return removed: True if the node owned at least one position
        """
        owned = set(position for position, owner in self._owners.items() if owner == node)

        if not owned:
            return False

        for position in owned:
            del self._owners[position]

        # filtering keeps the list sorted
        self._positions = [p for p in self._positions if p not in owned]
        logger.debug('Removed %s, ring holds %d positions', node, len(self._positions))

        return True

    def get(self, key):
        """
        Method used to find the node responsible for a key
        :param key: any string key
        :return node: owning node label, '' if the ring is empty
        """
        if not self._positions:
            return ''

        idx = bisect.bisect_left(self._positions, self._hash(key))

        # past the last position, wrap around to the first one
        if idx == len(self._positions):
            idx = 0

        return self._owners[self._positions[idx]]

    def get_nodes(self):
        """
        Sorted list of node labels currently on the ring
        """
        return sorted(set(self._owners.values()))
