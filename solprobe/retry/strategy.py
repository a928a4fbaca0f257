import asyncio
import time
from typing import Optional

from solprobe.retry.backoff import Backoff


class Strategy:
    """Determines whether or not an action should be retried. Strategies are allowed to delay or cause other side
    effects; delays suspend the calling coroutine instead of blocking the thread.
    """

    async def should_retry(self, attempts: int, e: Exception) -> bool:
        """Returns whether or not to retry, based on this strategy.

        :param attempts: The number of attempts that have occurred. Starts at 1, since the action is evaluated first.
        :param e: The :class:`Exception <Exception>` that was raised.
        :return: A bool indicating whether the action should be retried, based on this strategy.
        """
        raise NotImplementedError('Strategy is an abstract class. Strategy must implement should_retry().')


class DeadlineStrategy(Strategy):
    """A strategy that stops retrying once a fixed amount of time has passed since the strategy was created.

    :param max_wait: The maximum amount of time, in seconds, to keep retrying for.
    """

    def __init__(self, max_wait: float):
        self.max_wait = max_wait
        self._deadline = time.monotonic() + max_wait

    @property
    def remaining(self) -> float:
        return max(0.0, self._deadline - time.monotonic())

    async def should_retry(self, attempts: int, e: Exception) -> bool:
        return self.remaining > 0


class RetriableErrorsStrategy(Strategy):
    """A strategy that specifies which errors can be retried.

    :param: retriable_errors: A list of :class:`Exception <Exception>` classes that can be retried.
    """

    def __init__(self, retriable_errors):
        self.retriable_errors = retriable_errors

    async def should_retry(self, attempts: int, e: Exception) -> bool:
        return any(isinstance(e, error) for error in self.retriable_errors)


class BackoffStrategy(Strategy):
    """A strategy that will delay the next retry, provided the action raised an error.

    :param: backoff: The :class:`Backoff <solprobe.retry.backoff.Backoff>` to use to determine the amount of time to
        delay.
    :param max_backoff: The maximum backoff, in seconds.
    :param deadline: (optional) A :class:`DeadlineStrategy <DeadlineStrategy>`; delays are cut short so that they never
        extend past its deadline.
    """

    def __init__(self, backoff: Backoff, max_backoff: float, deadline: Optional[DeadlineStrategy] = None):
        self.backoff = backoff
        self.max_backoff = max_backoff
        self.deadline = deadline

    def _delay(self, attempts: int) -> float:
        delay = min(self.max_backoff, self.backoff.get_backoff(attempts))
        if self.deadline:
            delay = min(delay, self.deadline.remaining)
        return delay

    async def should_retry(self, attempts: int, e: Exception) -> bool:
        await asyncio.sleep(self._delay(attempts))
        return True
