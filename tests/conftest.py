import pytest

from solprobe.client import Client, ConfirmationConfig
from solprobe.keys import PrivateKey
from tests.fake_cluster import FakeCluster, ENDPOINT

_WALLET_BALANCE = 10 ** 9


@pytest.fixture
def program_id():
    return PrivateKey.random().public_key


@pytest.fixture
def wallet():
    return PrivateKey.random()


@pytest.fixture
def cluster(program_id, wallet) -> FakeCluster:
    cluster = FakeCluster(program_id)
    cluster.fund(wallet.public_key, _WALLET_BALANCE)
    return cluster


@pytest.fixture
def confirmation_config() -> ConfirmationConfig:
    return ConfirmationConfig(max_wait=2, min_delay=0, max_delay=0)


@pytest.fixture
def client(cluster, wallet, confirmation_config) -> Client:
    """Returns a Client talking to the fake cluster that polls without delay.
    """
    return Client(wallet, endpoint=ENDPOINT, http_client=cluster.http_client(),
                  confirmation_config=confirmation_config)
