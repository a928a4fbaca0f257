import logging
from typing import Optional

import base58
import httpx

from solprobe.client.composer import ProvisioningRequest
from solprobe.client.confirmation import ConfirmationConfig, wait_for_confirmation
from solprobe.client.environment import Environment, ENDPOINTS
from solprobe.client.rpc import RpcClient, system_instruction_indexes
from solprobe.error import CorruptAccountError, RejectionError, TransactionTimeoutError, TransportError
from solprobe.keys import PrivateKey, PublicKey
from solprobe.model import AccountInfo, ConfirmationResult
from solprobe.program import basic_1
from solprobe.solana import Commitment, Instruction, system

logger = logging.getLogger(__name__)


class Client:
    """A :class:`Client <Client>` submits requests on behalf of a funding wallet and reads back account state.

    :param wallet: The :class:`PrivateKey <solprobe.keys.PrivateKey>` of the funding wallet. It pays for, and signs,
        every submitted request.
    :param env: (optional) The :class:`Environment <solprobe.client.environment.Environment>` to use if no endpoint is
        provided. Defaults to Environment.DEVNET.
    :param endpoint: (optional) A JSON-RPC endpoint to use instead of the environment's default endpoint.
    :param http_client: (optional) An :class:`httpx.AsyncClient` to send requests with.
    :param confirmation_config: (optional): A :class:`ConfirmationConfig
        <solprobe.client.confirmation.ConfirmationConfig>` bounding how long submitted requests are polled for. If not
        provided, a default configuration will be used.
    :param default_commitment: (optional) The commitment to wait for, and to read state at. Defaults to
        Commitment.FINALIZED.
    """

    def __init__(
        self, wallet: PrivateKey, env: Environment = Environment.DEVNET, endpoint: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None, confirmation_config: Optional[ConfirmationConfig] = None,
        default_commitment: Commitment = Commitment.FINALIZED,
    ):
        self._wallet = wallet
        self._rpc = RpcClient(endpoint if endpoint else ENDPOINTS[env], http_client=http_client)
        self._confirmation_config = confirmation_config if confirmation_config else ConfirmationConfig()
        self._default_commitment = default_commitment

    async def __aenter__(self) -> 'Client':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def funder(self) -> PublicKey:
        return self._wallet.public_key

    @property
    def rpc(self) -> RpcClient:
        return self._rpc

    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        """Returns the balance, in lamports, that an account of `size` bytes needs to be exempt from rent.

        The quote is requested from the network on every call.

        :param size: The account data size, in bytes.
        :raise: :exc:`TransportError <solprobe.error.TransportError>`
        """
        lamports = await self._rpc.get_minimum_balance_for_rent_exemption(size)
        logger.debug('rent exempt minimum for %d bytes: %d lamports', size, lamports)
        return lamports

    async def create_account_instruction(
        self, owner: PublicKey, account: PublicKey, size: int = basic_1.ACCOUNT_SIZE,
    ) -> Instruction:
        """Builds the `CreateAccount` instruction for an account of `owner`, funded by the wallet with the rent-exempt
        minimum for `size`.

        :param owner: The program that will own the account.
        :param account: The address of the account to create.
        :param size: (optional) The account data size. Defaults to the size of a basic-1 account.
        """
        lamports = await self.get_minimum_balance_for_rent_exemption(size)
        return system.create_account(self.funder, account, owner, lamports, size)

    async def submit(
        self, request: ProvisioningRequest, commitment: Optional[Commitment] = None,
    ) -> ConfirmationResult:
        """Signs and submits the request, then suspends until it reaches `commitment`.

        Failures are reported through the returned result rather than raised.

        :param request: The :class:`ProvisioningRequest <solprobe.client.composer.ProvisioningRequest>` to submit.
        :param commitment: (optional) The commitment to wait for.
        :return: A :class:`ConfirmationResult <solprobe.model.ConfirmationResult>`.
        """
        commitment = commitment if commitment is not None else self._default_commitment

        missing = request.missing_signers()
        if missing:
            logger.warning('submitting request without the signature of created account(s): %s',
                           ', '.join(a.to_base58() for a in missing))

        tx = request.to_transaction(self.funder)
        system_instructions = system_instruction_indexes(tx)
        tx_id = None
        try:
            tx.set_blockhash(await self._rpc.get_latest_blockhash(commitment))
            tx.sign([self._wallet] + request.signers)
            tx_id = tx.get_signature()

            await self._rpc.send_transaction(tx, commitment)
            logger.debug('submitted transaction %s', _b58(tx_id))

            await wait_for_confirmation(self._rpc, tx_id, commitment, self._confirmation_config, system_instructions)
        except RejectionError as e:
            logger.warning('transaction %s rejected: %s', _b58(tx_id), e.message)
            return ConfirmationResult(tx_id, e)
        except (TransportError, TransactionTimeoutError) as e:
            return ConfirmationResult(tx_id, e)

        logger.info('transaction %s %s', _b58(tx_id), commitment.to_rpc())
        return ConfirmationResult(tx_id)

    async def send(self, request: ProvisioningRequest, commitment: Optional[Commitment] = None) -> bytes:
        """Submits the request and waits for it to reach `commitment`.

        :raise: :exc:`RejectionError <solprobe.error.RejectionError>`
        :raise: :exc:`TransactionTimeoutError <solprobe.error.TransactionTimeoutError>`
        :raise: :exc:`TransportError <solprobe.error.TransportError>`
        :return: The id of the transaction.
        """
        result = await self.submit(request, commitment)
        if result.error:
            raise result.error

        return result.tx_id

    async def fetch_account(self, public_key: PublicKey, commitment: Optional[Commitment] = None) -> AccountInfo:
        """Fetches the raw state of an account.

        :raise: :exc:`AccountNotFoundError <solprobe.error.AccountNotFoundError>`
        """
        commitment = commitment if commitment is not None else self._default_commitment
        return await self._rpc.get_account_info(public_key, commitment)

    async def fetch_my_account(
        self, public_key: PublicKey, program: Optional[PublicKey] = None, commitment: Optional[Commitment] = None,
    ) -> basic_1.MyAccount:
        """Fetches and decodes a basic-1 account.

        :param public_key: The address of the account.
        :param program: (optional) If provided, the account must be owned by this program.
        :param commitment: (optional) The commitment to read at.

        :raise: :exc:`AccountNotFoundError <solprobe.error.AccountNotFoundError>`
        :raise: :exc:`CorruptAccountError <solprobe.error.CorruptAccountError>`
        """
        info = await self.fetch_account(public_key, commitment)
        if program is not None and info.owner != program:
            raise CorruptAccountError(f'account {public_key.to_base58()} is owned by {info.owner.to_base58()}, '
                                      f'not {program.to_base58()}')

        return basic_1.MyAccount.unmarshal(info.data)

    async def close(self) -> None:
        """Closes the connection-related resources used by the client.
        """
        await self._rpc.close()


def _b58(tx_id: Optional[bytes]) -> str:
    return base58.b58encode(tx_id).decode('utf-8') if tx_id else '<unsigned>'
