from enum import IntEnum
from typing import NamedTuple

from solprobe.keys import PublicKey
from solprobe.solana.instruction import Instruction, AccountMeta
from solprobe.solana.transaction import Message

PROGRAM_KEY = PublicKey(bytes(32))

_CREATE_ACCOUNT_DATA_SIZE = 4 + 8 + 8 + 32
_MAX_UINT64 = 2 ** 64 - 1


class Command(IntEnum):
    CREATE_ACCOUNT = 0
    ASSIGN = 1
    TRANSFER = 2


# Reference: https://github.com/solana-labs/solana/blob/f02a78d8fff2dd7297dc6ce6eb5a68a3002f5359/sdk/src/system_instruction.rs#L58-L72  #noqa: E501
def create_account(
    funder: PublicKey, address: PublicKey, owner: PublicKey, lamports: int, size: int
) -> Instruction:
    """
    Account references
      0. [WRITE, SIGNER] Funding account
      1. [WRITE, SIGNER] New account

      CreateAccount {
        // Number of lamports to transfer to the new account
        lamports: u64,
        // Number of bytes of memory to allocate
        space: u64,

        // Address of program that will own the new account
        owner: Pubkey,
      }

    The new account signs for its own creation, so its private key has to be among the transaction signers.
    """
    for name, value in (('lamports', lamports), ('size', size)):
        if value < 0 or value > _MAX_UINT64:
            raise ValueError(f'`{name}` must be in the range [0, 2**64)')

    data = bytearray()
    data.extend(Command.CREATE_ACCOUNT.to_bytes(4, 'little'))
    data.extend(lamports.to_bytes(8, 'little'))
    data.extend(size.to_bytes(8, 'little'))
    data.extend(owner.raw)

    return Instruction(
        PROGRAM_KEY,
        data,
        [
            AccountMeta.new(funder, True),
            AccountMeta.new(address, True),
        ],
    )


class DecompiledCreateAccount(NamedTuple):
    funder: PublicKey
    address: PublicKey
    owner: PublicKey
    lamports: int
    size: int


def decompile_create_account(m: Message, index: int) -> DecompiledCreateAccount:
    if m.program_key(index) != PROGRAM_KEY:
        raise ValueError('incorrect program')

    i = m.instructions[index]
    if len(i.accounts) != 2:
        raise ValueError(f'invalid number of accounts: {len(i.accounts)}')

    if len(i.data) != _CREATE_ACCOUNT_DATA_SIZE:
        raise ValueError(f'invalid instruction data size: {len(i.data)}')

    if int.from_bytes(i.data[0:4], 'little') != Command.CREATE_ACCOUNT:
        raise ValueError('incorrect command')

    return DecompiledCreateAccount(
        m.accounts[i.accounts[0]],
        m.accounts[i.accounts[1]],
        PublicKey(i.data[20:]),
        int.from_bytes(i.data[4:12], 'little'),
        int.from_bytes(i.data[12:20], 'little'),
    )
