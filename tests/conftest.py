import random
import string

import pytest

from ring_router.router_node import RouterNodeWrapper

HOSTS = ['host 1', 'host 2', 'host 3', 'host 4', 'host 5', 'host 6', 'host 7', 'host 8']


def table_hash(table):
    """
    Hash function looking values up in a table, so tests can put
    positions exactly where they want them on the ring
    """
    def _hash(data):
        return table[data.decode('utf-8')]
    return _hash


@pytest.fixture
def random_keys():
    seeded = random.Random(1138)
    charset = string.ascii_letters + string.digits
    return [''.join(seeded.choice(charset) for _ in range(64)) for _ in range(10000)]


@pytest.fixture
def router(monkeypatch):
    monkeypatch.delenv('VIEW', raising=False)
    node = RouterNodeWrapper('127.0.0.1', 13800, '10.10.0.2:13800,10.10.0.3:13800', 50)
    node.setup_routes()
    node.setup_view()
    node.app.config['TESTING'] = True
    return node


@pytest.fixture
def client(router):
    return router.app.test_client()
