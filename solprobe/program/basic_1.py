from typing import NamedTuple

from solprobe.error import CorruptAccountError
from solprobe.keys import PublicKey
from solprobe.program.discriminator import DISCRIMINATOR_SIZE, account_discriminator, instruction_discriminator
from solprobe.solana.instruction import Instruction, AccountMeta
from solprobe.solana.sysvar import RENT_PUBKEY
from solprobe.solana.transaction import Message

_U64_SIZE = 8
_MAX_UINT64 = 2 ** 64 - 1

ACCOUNT_NAME = 'MyAccount'
ACCOUNT_DISCRIMINATOR = account_discriminator(ACCOUNT_NAME)

# Discriminator followed by `data: u64`.
ACCOUNT_SIZE = DISCRIMINATOR_SIZE + _U64_SIZE

INITIALIZE = instruction_discriminator('initialize')
UPDATE = instruction_discriminator('update')


class MyAccount:
    """The decoded state of a basic-1 data account.

    :param data: The stored integer.
    """

    def __init__(self, data: int):
        self.data = data

    def __eq__(self, other):
        if not isinstance(other, MyAccount):
            return False

        return self.data == other.data

    def __repr__(self):
        return f'{self.__class__.__name__}(data={self.data})'

    def marshal(self) -> bytes:
        return ACCOUNT_DISCRIMINATOR + _encode_u64(self.data)

    @classmethod
    def unmarshal(cls, b: bytes) -> 'MyAccount':
        """Decodes raw account data. Trailing bytes beyond the layout are ignored.

        :raise: :exc:`CorruptAccountError <solprobe.error.CorruptAccountError>`
        """
        if len(b) < ACCOUNT_SIZE:
            raise CorruptAccountError(f'account data too short: {len(b)} < {ACCOUNT_SIZE}')

        if b[:DISCRIMINATOR_SIZE] != ACCOUNT_DISCRIMINATOR:
            raise CorruptAccountError(f'account discriminator mismatch: {bytes(b[:DISCRIMINATOR_SIZE]).hex()}')

        return cls(int.from_bytes(b[DISCRIMINATOR_SIZE:ACCOUNT_SIZE], 'little'))


def initialize(program: PublicKey, account: PublicKey, data: int) -> Instruction:
    """
    Account references
      0. [WRITE] The account to initialize. Must already be allocated with ACCOUNT_SIZE bytes and owned by `program`.
      1. [] Rent sysvar

    Sets `data` on a zeroed account and writes the account discriminator.
    """
    return Instruction(
        program,
        INITIALIZE + _encode_u64(data),
        [
            AccountMeta.new(account, False),
            AccountMeta.new_read_only(RENT_PUBKEY, False),
        ],
    )


def update(program: PublicKey, account: PublicKey, data: int) -> Instruction:
    """
    Account references
      0. [WRITE] A previously initialized account.

    Replaces the stored `data`.
    """
    return Instruction(
        program,
        UPDATE + _encode_u64(data),
        [
            AccountMeta.new(account, False),
        ],
    )


class DecompiledInitialize(NamedTuple):
    account: PublicKey
    data: int


class DecompiledUpdate(NamedTuple):
    account: PublicKey
    data: int


def decompile_initialize(m: Message, index: int, program: PublicKey) -> DecompiledInitialize:
    i = _program_instruction(m, index, program, INITIALIZE, 2)
    if m.accounts[i.accounts[1]] != RENT_PUBKEY:
        raise ValueError('missing rent sysvar')

    return DecompiledInitialize(m.accounts[i.accounts[0]], int.from_bytes(i.data[DISCRIMINATOR_SIZE:], 'little'))


def decompile_update(m: Message, index: int, program: PublicKey) -> DecompiledUpdate:
    i = _program_instruction(m, index, program, UPDATE, 1)
    return DecompiledUpdate(m.accounts[i.accounts[0]], int.from_bytes(i.data[DISCRIMINATOR_SIZE:], 'little'))


def _program_instruction(m: Message, index: int, program: PublicKey, discriminator: bytes, num_accounts: int):
    if m.program_key(index) != program:
        raise ValueError('incorrect program')

    i = m.instructions[index]
    if len(i.data) != DISCRIMINATOR_SIZE + _U64_SIZE:
        raise ValueError(f'invalid instruction data size: {len(i.data)}')

    if i.data[:DISCRIMINATOR_SIZE] != discriminator:
        raise ValueError('incorrect instruction')

    if len(i.accounts) != num_accounts:
        raise ValueError(f'invalid number of accounts: {len(i.accounts)}')

    return i


def _encode_u64(value: int) -> bytes:
    if value < 0 or value > _MAX_UINT64:
        raise ValueError('value must be in the range [0, 2**64)')

    return value.to_bytes(_U64_SIZE, 'little')
