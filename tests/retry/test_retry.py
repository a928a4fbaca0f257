import pytest

from solprobe.retry import retry, DeadlineStrategy, RetriableErrorsStrategy, BinaryExponentialBackoff
from solprobe.retry.strategy import BackoffStrategy, Strategy
from tests.utils import patch_sleep, patch_monotonic


class _Attempts(Strategy):
    def __init__(self, max_attempts: int):
        self.max_attempts = max_attempts

    async def should_retry(self, attempts: int, e: Exception) -> bool:
        return attempts < self.max_attempts


class TestRetry:
    @pytest.mark.asyncio
    async def test_retry(self, mocker):
        mock_sleep = patch_sleep(mocker)
        strategies = [
            _Attempts(2),
            BackoffStrategy(BinaryExponentialBackoff(0.5), 0.5),
        ]

        assert not await retry(strategies, self._return_none)
        assert mock_sleep.await_count == 0

        with pytest.raises(ValueError):
            await retry(strategies, self._raise_value_error)

        # One delay between the two attempts.
        mock_sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_retry_until_success(self):
        calls = []

        async def _flaky(value):
            calls.append(value)
            if len(calls) < 3:
                raise ConnectionError()
            return value

        assert await retry([RetriableErrorsStrategy([ConnectionError]), _Attempts(5)], _flaky, 'ok') == 'ok'
        assert calls == ['ok'] * 3

    @pytest.mark.asyncio
    async def test_retry_until_deadline(self, mocker):
        mock_time = patch_monotonic(mocker)
        calls = []

        async def _pending():
            calls.append(1)
            if len(calls) == 3:
                mock_time.monotonic.return_value = 101.0
            raise ConnectionError()

        with pytest.raises(ConnectionError):
            await retry([RetriableErrorsStrategy([ConnectionError]), DeadlineStrategy(1)], _pending)
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_retry_non_retriable(self):
        with pytest.raises(ValueError):
            await retry([RetriableErrorsStrategy([ConnectionError]), _Attempts(5)], self._raise_value_error)

    @pytest.mark.asyncio
    async def test_retry_no_strategies(self):
        with pytest.raises(ValueError):
            await retry([], self._raise_value_error)

    @staticmethod
    async def _return_none():
        return

    @staticmethod
    async def _raise_value_error():
        raise ValueError()
