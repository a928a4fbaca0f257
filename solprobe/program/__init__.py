from .basic_1 import ACCOUNT_SIZE, MyAccount, initialize, update
from .discriminator import account_discriminator, instruction_discriminator

__all__ = [
    'ACCOUNT_SIZE',
    'MyAccount',
    'initialize',
    'update',
    'account_discriminator',
    'instruction_discriminator',
]
