"""The basic-1 verification scenarios.

Each scenario provisions or mutates an account, waits for the transaction(s) to reach the client's commitment, then
reads the account back and checks the stored value. Any error aborts the scenario.

The update scenario operates on an account created by an earlier scenario. That account is passed in explicitly; the
scenarios share no state.
"""
import logging
from typing import List, Optional

import base58

from solprobe.client import Client, compose_atomic, compose_split, compose_program_call, compose_with_create
from solprobe.error import StateMismatchError
from solprobe.keys import PrivateKey, PublicKey
from solprobe.program import basic_1

logger = logging.getLogger(__name__)


class ScenarioResult:
    """The outcome of a passed scenario.

    :param name: The scenario name.
    :param account: The key of the account the scenario operated on. Pass it to a later scenario to reuse the account.
    :param state: The decoded state that was verified.
    :param tx_ids: The ids of the transactions the scenario submitted, in submission order.
    """

    def __init__(self, name: str, account: PrivateKey, state: basic_1.MyAccount, tx_ids: Optional[List[bytes]] = None):
        self.name = name
        self.account = account
        self.state = state
        self.tx_ids = tx_ids if tx_ids else []

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'name={self.name!r}, account={self.account.public_key.to_base58()}, state={self.state!r}, ' \
               f'tx_ids={[base58.b58encode(t).decode() for t in self.tx_ids]})'


async def create_and_initialize_split(client: Client, program_id: PublicKey, value: int) -> ScenarioResult:
    """Creates an account in one transaction, then initializes it in a second one."""
    account = PrivateKey.random()
    lamports = await client.get_minimum_balance_for_rent_exemption(basic_1.ACCOUNT_SIZE)

    create_request, initialize_request = compose_split(
        client.funder, account, program_id, lamports, basic_1.ACCOUNT_SIZE,
        basic_1.initialize(program_id, account.public_key, value),
    )
    tx_ids = [await client.send(create_request)]
    tx_ids.append(await client.send(initialize_request))

    state = await verify_account(client, program_id, account.public_key, value)
    return ScenarioResult('create and initialize (split)', account, state, tx_ids)


async def create_and_initialize_atomic(client: Client, program_id: PublicKey, value: int) -> ScenarioResult:
    """Creates and initializes an account in a single transaction, with an explicitly sized CreateAccount
    instruction."""
    account = PrivateKey.random()
    lamports = await client.get_minimum_balance_for_rent_exemption(basic_1.ACCOUNT_SIZE)

    request = compose_atomic(
        client.funder, account, program_id, lamports, basic_1.ACCOUNT_SIZE,
        basic_1.initialize(program_id, account.public_key, value),
    )
    tx_ids = [await client.send(request)]

    state = await verify_account(client, program_id, account.public_key, value)
    return ScenarioResult('create and initialize (atomic)', account, state, tx_ids)


async def create_and_initialize_simplified(client: Client, program_id: PublicKey, value: int) -> ScenarioResult:
    """Creates and initializes an account in a single transaction, deriving the CreateAccount instruction from the
    account layout. The returned result carries the account for :func:`update_account <update_account>`."""
    account = PrivateKey.random()

    create_instruction = await client.create_account_instruction(program_id, account.public_key)
    request = compose_with_create(
        create_instruction, account, basic_1.initialize(program_id, account.public_key, value),
    )
    tx_ids = [await client.send(request)]

    state = await verify_account(client, program_id, account.public_key, value)
    return ScenarioResult('create and initialize (simplified)', account, state, tx_ids)


async def update_account(client: Client, program_id: PublicKey, account: PrivateKey, value: int) -> ScenarioResult:
    """Updates a previously initialized account."""
    request = compose_program_call(basic_1.update(program_id, account.public_key, value))
    tx_ids = [await client.send(request)]

    state = await verify_account(client, program_id, account.public_key, value)
    return ScenarioResult('update', account, state, tx_ids)


async def verify_account(client: Client, program_id: PublicKey, account: PublicKey, expected: int) -> basic_1.MyAccount:
    """Fetches the account and checks that it stores `expected`.

    :raise: :exc:`StateMismatchError <solprobe.error.StateMismatchError>`
    """
    state = await client.fetch_my_account(account, program=program_id)
    if state.data != expected:
        logger.warning('account %s holds %d, expected %d', account.to_base58(), state.data, expected)
        raise StateMismatchError(expected, state.data)

    return state
