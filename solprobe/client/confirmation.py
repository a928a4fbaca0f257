import logging
from typing import Optional, Sequence

import base58

from solprobe.error import Error, TransactionTimeoutError, error_from_transaction_err
from solprobe.retry import retry, RetriableErrorsStrategy, DeadlineStrategy, BackoffStrategy, \
    BinaryExponentialBackoff
from solprobe.solana import Commitment

logger = logging.getLogger(__name__)


class ConfirmationConfig:
    """A :class:`ConfirmationConfig <ConfirmationConfig>` bounds how long a submitted transaction is polled for.

    Polls start `min_delay` seconds apart and the delay doubles after each poll, up to `max_delay`. Once `max_wait`
    seconds have passed without the transaction reaching the requested commitment, the wait fails with
    :exc:`TransactionTimeoutError <solprobe.error.TransactionTimeoutError>`.

    :param max_wait: (optional) The maximum time to wait for a transaction, in seconds. Defaults to 60 seconds if value
        is not provided or value is not above 0.
    :param min_delay: (optional) The delay before the second poll, in seconds. Defaults to 0.5 seconds if value is not
        provided or value is below 0.
    :param max_delay: (optional) The maximum delay between polls, in seconds. Defaults to 5 seconds if value is not
        provided or value is below 0.
    """

    def __init__(
        self, max_wait: Optional[float] = None, min_delay: Optional[float] = None, max_delay: Optional[float] = None,
    ):
        self.max_wait = max_wait if max_wait is not None and max_wait > 0 else 60
        self.min_delay = min_delay if min_delay is not None and min_delay >= 0 else 0.5
        self.max_delay = max_delay if max_delay is not None and max_delay >= 0 else 5

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'max_wait={self.max_wait}, min_delay={self.min_delay}, max_delay={self.max_delay})'


class TransactionPendingError(Error):
    """Raised while a transaction has not reached the requested commitment yet.
    """


async def wait_for_confirmation(
    rpc, tx_id: bytes, commitment: Commitment, config: ConfirmationConfig, system_instructions: Sequence[int] = (),
) -> None:
    """Suspends until the transaction reaches `commitment`, fails, or the configured wait runs out.

    :param rpc: The :class:`RpcClient <solprobe.client.rpc.RpcClient>` to poll.
    :param tx_id: The id of the submitted transaction.
    :param commitment: The :class:`Commitment <solprobe.solana.Commitment>` to wait for.
    :param config: The :class:`ConfirmationConfig <ConfirmationConfig>` bounding the wait.
    :param system_instructions: (optional) Indexes of system program instructions, used to classify failures.

    :raise: :exc:`RejectionError <solprobe.error.RejectionError>`
    :raise: :exc:`TransactionTimeoutError <solprobe.error.TransactionTimeoutError>`
    :raise: :exc:`TransportError <solprobe.error.TransportError>`
    """
    deadline = DeadlineStrategy(config.max_wait)
    strategies = [
        RetriableErrorsStrategy([TransactionPendingError]),
        deadline,
        BackoffStrategy(BinaryExponentialBackoff(config.min_delay), config.max_delay, deadline=deadline),
    ]

    async def _check_status():
        status = (await rpc.get_signature_statuses([tx_id]))[0]
        if status and status.failed:
            raise error_from_transaction_err(status.err, tx_id=tx_id, system_instructions=system_instructions)

        if not status or not commitment.is_satisfied_by(status.commitment):
            observed = status.commitment.to_rpc() if status and status.commitment is not None else 'unknown'
            raise TransactionPendingError(f'last seen at {observed}')

        return status

    try:
        status = await retry(strategies, _check_status)
    except TransactionPendingError as e:
        logger.warning('transaction %s not %s after %ss (%s)', _b58(tx_id), commitment.to_rpc(), config.max_wait,
                       e.message)
        raise TransactionTimeoutError(
            f'transaction not {commitment.to_rpc()} within {config.max_wait}s', tx_id=tx_id,
        ) from e

    logger.debug('transaction %s reached %s in slot %d', _b58(tx_id), commitment.to_rpc(), status.slot)


def _b58(tx_id: bytes) -> str:
    return base58.b58encode(tx_id).decode('utf-8')
