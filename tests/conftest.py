
import pytest
from fake_runtime import FakeHostRuntime
from bucketboard.peers.memory import SortedPeerSource

@pytest.fixture
def runtime():
    return FakeHostRuntime(end_active=1000)

@pytest.fixture
def user_ids():
    return [f"{i:08d}-0000-4000-8000-000000000000" for i in range(1, 31)]

@pytest.fixture
def peer_source(user_ids):
    return SortedPeerSource(user_ids)
