"""An in-memory stand-in for a Solana JSON-RPC node running the basic-1 program.

It verifies signatures, executes system CreateAccount and basic-1 initialize/update instructions atomically, and
reports each transaction as processed, then confirmed, then finalized over successive status polls.
"""
import base64
import json
import os
from typing import Dict, List, Set

import base58
import httpx
from nacl.exceptions import BadSignatureError

from solprobe.keys import PublicKey
from solprobe.program import basic_1
from solprobe.program.discriminator import DISCRIMINATOR_SIZE
from solprobe.solana import Commitment, system
from solprobe.solana.transaction import Transaction, SIGNATURE_LENGTH

ENDPOINT = 'http://fake-cluster'

LAMPORTS_PER_SIGNATURE = 5000

# Anchor error codes.
ACCOUNT_DISCRIMINATOR_ALREADY_SET = 3000
ACCOUNT_DISCRIMINATOR_MISMATCH = 3002
ACCOUNT_NOT_RENT_EXEMPT = 3005
ACCOUNT_OWNED_BY_WRONG_PROGRAM = 3007


def rent_exempt_minimum(size: int) -> int:
    # (ACCOUNT_STORAGE_OVERHEAD + size) * lamports_per_byte_year * exemption_threshold
    return (128 + size) * 3480 * 2


class FakeAccount:
    def __init__(self, lamports: int, data: bytes, owner: PublicKey):
        self.lamports = lamports
        self.data = bytearray(data)
        self.owner = owner


class _Failed(Exception):
    def __init__(self, err):
        super().__init__(err)
        self.err = err


class _RpcError(Exception):
    def __init__(self, error: dict):
        super().__init__(error['message'])
        self.error = error


class FakeCluster:
    """
    :param program_id: The address the basic-1 program is deployed at.
    :param polls_to_finalize: The number of status polls after which a transaction is finalized. Polls before that
        report processed, then confirmed.
    :param preflight: If False, failed transactions are accepted by sendTransaction and their error is only reported
        in the signature status.
    """

    def __init__(self, program_id: PublicKey, polls_to_finalize: int = 2, preflight: bool = True):
        self.program_id = program_id
        self.polls_to_finalize = polls_to_finalize
        self.preflight = preflight

        self.accounts: Dict[PublicKey, FakeAccount] = {}
        self.blockhashes: Set[bytes] = set()
        self.statuses: Dict[bytes, dict] = {}
        self.calls: List[str] = []
        self.requests: List[dict] = []
        self.failing_methods: Set[str] = set()
        self.never_finalize = False
        self.slot = 1

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    def fund(self, public_key: PublicKey, lamports: int):
        self.accounts[public_key] = FakeAccount(lamports, b'', system.PROGRAM_KEY)

    def calls_to(self, method: str) -> int:
        return self.calls.count(method)

    def sent_transactions(self) -> List[Transaction]:
        return [Transaction.unmarshal(base64.b64decode(r['params'][0]))
                for r in self.requests if r['method'] == 'sendTransaction']

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body['method']
        self.calls.append(method)
        self.requests.append(body)

        if method in self.failing_methods:
            raise httpx.ConnectError('connection refused', request=request)

        try:
            result = getattr(self, f'_{method}')(*body['params'])
        except _RpcError as e:
            return httpx.Response(200, json={'jsonrpc': '2.0', 'id': body['id'], 'error': e.error})

        return httpx.Response(200, json={'jsonrpc': '2.0', 'id': body['id'], 'result': result})

    def _getMinimumBalanceForRentExemption(self, size, config=None):
        return rent_exempt_minimum(size)

    def _getLatestBlockhash(self, config=None):
        blockhash = os.urandom(32)
        self.blockhashes.add(blockhash)
        return {
            'context': {'slot': self.slot},
            'value': {'blockhash': base58.b58encode(blockhash).decode(), 'lastValidBlockHeight': self.slot + 150},
        }

    def _getAccountInfo(self, address, config=None):
        account = self.accounts.get(PublicKey.from_base58(address))
        if account is None:
            return {'context': {'slot': self.slot}, 'value': None}

        return {
            'context': {'slot': self.slot},
            'value': {
                'data': [base64.b64encode(bytes(account.data)).decode(), 'base64'],
                'executable': False,
                'lamports': account.lamports,
                'owner': account.owner.to_base58(),
                'rentEpoch': 0,
            },
        }

    def _getSignatureStatuses(self, signatures, config=None):
        value = []
        for signature in signatures:
            status = self.statuses.get(base58.b58decode(signature))
            if status is None:
                value.append(None)
                continue

            status['polls'] += 1
            if status['polls'] >= self.polls_to_finalize and not self.never_finalize:
                commitment = Commitment.FINALIZED
            elif status['polls'] > 1:
                commitment = Commitment.CONFIRMED
            else:
                commitment = Commitment.PROCESSED

            value.append({
                'slot': status['slot'],
                'confirmations': None if commitment == Commitment.FINALIZED else status['polls'],
                'err': status['err'],
                'status': {'Ok': None} if status['err'] is None else {'Err': status['err']},
                'confirmationStatus': commitment.to_rpc(),
            })

        return {'context': {'slot': self.slot}, 'value': value}

    def _sendTransaction(self, encoded, config=None):
        tx = Transaction.unmarshal(base64.b64decode(encoded))
        message_bytes = tx.message.marshal()

        for signer, signature in zip(tx.message.signers, tx.signatures):
            try:
                if signature == bytes(SIGNATURE_LENGTH):
                    raise BadSignatureError()
                signer.verify(message_bytes, signature)
            except BadSignatureError:
                raise _RpcError({'code': -32003, 'message': 'Transaction signature verification failure'})

        tx_id = tx.signatures[0]
        err = None
        if tx.message.recent_blockhash not in self.blockhashes:
            err = 'BlockhashNotFound'
        else:
            try:
                self._execute(tx)
            except _Failed as e:
                err = e.err

        if err is not None and self.preflight:
            raise _RpcError({
                'code': -32002,
                'message': f'Transaction simulation failed: {err}',
                'data': {'err': err, 'logs': []},
            })

        self.slot += 1
        self.statuses[tx_id] = {'slot': self.slot, 'err': err, 'polls': 0}
        return base58.b58encode(tx_id).decode()

    def _execute(self, tx: Transaction):
        m = tx.message
        accounts = {k: FakeAccount(v.lamports, bytes(v.data), v.owner) for k, v in self.accounts.items()}

        payer = accounts.get(m.accounts[0])
        fee = LAMPORTS_PER_SIGNATURE * m.header.num_required_signatures
        if payer is None or payer.lamports < fee:
            raise _Failed('InsufficientFundsForFee')
        payer.lamports -= fee

        for idx in range(len(m.instructions)):
            program = m.program_key(idx)
            if program == system.PROGRAM_KEY:
                self._create_account(accounts, m, idx)
            elif program == self.program_id:
                self._run_basic_1(accounts, m, idx)
            else:
                raise _Failed({'InstructionError': [idx, 'IncorrectProgramId']})

        self.accounts = accounts

    def _create_account(self, accounts, m, idx):
        try:
            c = system.decompile_create_account(m, idx)
        except ValueError:
            raise _Failed({'InstructionError': [idx, 'InvalidInstructionData']})

        if c.address in accounts:
            raise _Failed({'InstructionError': [idx, {'Custom': 0}]})

        funder = accounts.get(c.funder)
        if funder is None or funder.lamports < c.lamports:
            raise _Failed({'InstructionError': [idx, {'Custom': 1}]})

        if c.lamports < rent_exempt_minimum(c.size):
            raise _Failed({'InsufficientFundsForRent': {'account_index': m.accounts.index(c.address)}})

        funder.lamports -= c.lamports
        accounts[c.address] = FakeAccount(c.lamports, bytes(c.size), c.owner)

    def _run_basic_1(self, accounts, m, idx):
        data = m.instructions[idx].data
        try:
            if data[:DISCRIMINATOR_SIZE] == basic_1.INITIALIZE:
                decompiled = basic_1.decompile_initialize(m, idx, self.program_id)
                initialize = True
            else:
                decompiled = basic_1.decompile_update(m, idx, self.program_id)
                initialize = False
        except ValueError:
            raise _Failed({'InstructionError': [idx, 'InvalidInstructionData']})

        account = accounts.get(decompiled.account)
        if account is None or account.owner != self.program_id:
            raise _Failed({'InstructionError': [idx, {'Custom': ACCOUNT_OWNED_BY_WRONG_PROGRAM}]})

        if initialize:
            if len(account.data) < basic_1.ACCOUNT_SIZE:
                raise _Failed({'InstructionError': [idx, 'AccountDataTooSmall']})
            if account.data[:DISCRIMINATOR_SIZE] != bytes(DISCRIMINATOR_SIZE):
                raise _Failed({'InstructionError': [idx, {'Custom': ACCOUNT_DISCRIMINATOR_ALREADY_SET}]})
            if account.lamports < rent_exempt_minimum(len(account.data)):
                raise _Failed({'InstructionError': [idx, {'Custom': ACCOUNT_NOT_RENT_EXEMPT}]})
        elif account.data[:DISCRIMINATOR_SIZE] != basic_1.ACCOUNT_DISCRIMINATOR:
            raise _Failed({'InstructionError': [idx, {'Custom': ACCOUNT_DISCRIMINATOR_MISMATCH}]})

        account.data[:basic_1.ACCOUNT_SIZE] = basic_1.MyAccount(decompiled.data).marshal()
