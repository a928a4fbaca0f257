from typing import List

from solprobe.keys import PrivateKey


def generate_keys(amount) -> List[PrivateKey]:
    return [PrivateKey.random() for _ in range(amount)]


def patch_sleep(mocker):
    """Replaces the delays of the retry strategies with an AsyncMock, and returns it.
    """
    mock_asyncio = mocker.patch('solprobe.retry.strategy.asyncio')
    mock_asyncio.sleep = mocker.AsyncMock()
    return mock_asyncio.sleep


def patch_monotonic(mocker, now: float = 100.0):
    mock_time = mocker.patch('solprobe.retry.strategy.time')
    mock_time.monotonic.return_value = now
    return mock_time
