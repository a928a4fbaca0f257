import logging
from contextlib import contextmanager
from typing import Any, List, Optional

import base58
import httpx

from solprobe.error import AccountNotFoundError, TransportError, error_from_rpc
from solprobe.keys import PublicKey
from solprobe.model import AccountInfo, SignatureStatus
from solprobe.solana import Commitment, Transaction
from solprobe.solana.system import PROGRAM_KEY as SYSTEM_PROGRAM_KEY
from solprobe.utils import user_agent
from solprobe.version import VERSION

logger = logging.getLogger(__name__)

_HTTP_TIMEOUT_SECONDS = 10


class RpcClient:
    """A thin asynchronous client for the Solana JSON-RPC API. Only the calls needed to provision, confirm and read
    accounts are exposed. Calls are not retried.

    :param endpoint: The JSON-RPC endpoint URL.
    :param http_client: (optional) The :class:`httpx.AsyncClient` to use. If not provided, one is created, and closed by
        :meth:`close`.
    :param timeout: (optional) The timeout of each HTTP request, in seconds.
    """

    def __init__(self, endpoint: str, http_client: Optional[httpx.AsyncClient] = None,
                 timeout: float = _HTTP_TIMEOUT_SECONDS):
        self._endpoint = endpoint
        self._owns_http_client = http_client is None
        self._http = http_client if http_client else httpx.AsyncClient(timeout=timeout)
        self._headers = dict([user_agent(VERSION)])
        self._request_id = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def close(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def get_minimum_balance_for_rent_exemption(
        self, size: int, commitment: Optional[Commitment] = None,
    ) -> int:
        """Returns the minimum balance, in lamports, that keeps an account of `size` bytes exempt from rent.

        :param size: The account data size, in bytes.
        :param commitment: (optional) The commitment to query at.
        """
        return await self._call('getMinimumBalanceForRentExemption', [size] + _config(commitment))

    async def get_latest_blockhash(self, commitment: Optional[Commitment] = None) -> bytes:
        result = await self._call('getLatestBlockhash', _config(commitment))
        with _parsing('getLatestBlockhash'):
            return base58.b58decode(result['value']['blockhash'])

    async def send_transaction(self, tx: Transaction, commitment: Optional[Commitment] = None) -> bytes:
        """Submits a signed transaction. The node simulates the transaction first, so most failures are reported here
        rather than in the signature status.

        :param tx: The signed :class:`Transaction <solprobe.solana.Transaction>`.
        :param commitment: (optional) The commitment to simulate against.
        :raise: :exc:`RejectionError <solprobe.error.RejectionError>`
        :return: The transaction id.
        """
        config = {'encoding': 'base64'}
        if commitment is not None:
            config['preflightCommitment'] = commitment.to_rpc()

        system_instructions = system_instruction_indexes(tx)
        result = await self._call(
            'sendTransaction', [tx.to_base64(), config],
            tx_id=tx.get_signature(), system_instructions=system_instructions,
        )
        with _parsing('sendTransaction'):
            return base58.b58decode(result)

    async def get_signature_statuses(self, tx_ids: List[bytes]) -> List[Optional[SignatureStatus]]:
        """Returns the status of each transaction, or None for transactions the node doesn't know about (yet).
        """
        result = await self._call('getSignatureStatuses', [
            [base58.b58encode(tx_id).decode('utf-8') for tx_id in tx_ids],
            {'searchTransactionHistory': True},
        ])
        with _parsing('getSignatureStatuses'):
            return [SignatureStatus.from_rpc(v) if v else None for v in result['value']]

    async def get_account_info(self, public_key: PublicKey, commitment: Optional[Commitment] = None) -> AccountInfo:
        """Returns the raw state of an account.

        :raise: :exc:`AccountNotFoundError <solprobe.error.AccountNotFoundError>`
        """
        config = {'encoding': 'base64'}
        if commitment is not None:
            config['commitment'] = commitment.to_rpc()

        result = await self._call('getAccountInfo', [public_key.to_base58(), config])
        with _parsing('getAccountInfo'):
            value = result['value']
            if value is not None:
                return AccountInfo.from_rpc(public_key, value)

        raise AccountNotFoundError(f'account {public_key.to_base58()} not found')

    async def _call(self, method: str, params: List[Any], tx_id: Optional[bytes] = None,
                    system_instructions=()) -> Any:
        self._request_id += 1
        payload = {'jsonrpc': '2.0', 'id': self._request_id, 'method': method, 'params': params}
        logger.debug('rpc request %d: %s', self._request_id, method)

        try:
            resp = await self._http.post(self._endpoint, json=payload, headers=self._headers)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(f'{method}: unexpected http status {e.response.status_code}', cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f'{method}: {e!r}', cause=e) from e
        except ValueError as e:
            raise TransportError(f'{method}: malformed response body', cause=e) from e

        if not isinstance(body, dict):
            raise TransportError(f'{method}: malformed response body')

        if body.get('error') is not None:
            logger.debug('rpc request %d failed: %s', self._request_id, body['error'])
            raise error_from_rpc(body['error'], tx_id=tx_id, system_instructions=system_instructions)

        if 'result' not in body:
            raise TransportError(f'{method}: response has neither result nor error')

        return body['result']


def system_instruction_indexes(tx: Transaction) -> List[int]:
    return [idx for idx in range(len(tx.message.instructions))
            if tx.message.program_key(idx) == SYSTEM_PROGRAM_KEY]


@contextmanager
def _parsing(method: str):
    try:
        yield
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(f'{method}: malformed result', cause=e) from e


def _config(commitment: Optional[Commitment]) -> List[dict]:
    return [{'commitment': commitment.to_rpc()}] if commitment is not None else []
