import logging
from typing import Awaitable, Callable, List

from solprobe.retry.backoff import Backoff, ExponentialBackoff, BinaryExponentialBackoff
from solprobe.retry.strategy import Strategy, DeadlineStrategy, RetriableErrorsStrategy, BackoffStrategy

logger = logging.getLogger(__name__)


async def retry(strategies: List[Strategy], f: Callable[..., Awaitable], *args, **kwargs):
    """Awaits the provided coroutine function, potentially multiple times based off the provided strategies. Retry
    suspends until the action is successful, or one of the provided strategies indicates no further retries should be
    performed, in which case the last error is raised.

    The strategies are executed in the provided order, so any strategies that induce delays should be specified last.

    :param strategies: The list of :class:`Strategy <solprobe.retry.strategy.Strategy>` objects to use
    :param f: A coroutine function to call with the provided args and kwargs.
    :return: The return value of `f`.
    """
    i = 1
    while True:
        try:
            return await f(*args, **kwargs)
        except Exception as e:
            if not strategies:
                raise e

            for s in strategies:
                if not await s.should_retry(i, e):
                    raise e

            logger.debug('retrying %s after attempt %d: %r', getattr(f, '__name__', f), i, e)
        i += 1


__all__ = [
    'retry',
    'Backoff',
    'ExponentialBackoff',
    'BinaryExponentialBackoff',
    'Strategy',
    'DeadlineStrategy',
    'RetriableErrorsStrategy',
    'BackoffStrategy',
]
