from .commitment import Commitment
from .instruction import Instruction, AccountMeta
from .system import create_account, decompile_create_account
from .sysvar import RENT_PUBKEY
from .transaction import Transaction, Message, SIGNATURE_LENGTH, HASH_LENGTH

__all__ = [
    'Commitment',
    'Instruction',
    'AccountMeta',
    'create_account',
    'decompile_create_account',
    'RENT_PUBKEY',
    'Transaction',
    'Message',
    'SIGNATURE_LENGTH',
    'HASH_LENGTH',
]
