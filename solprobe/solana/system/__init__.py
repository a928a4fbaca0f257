from .program import PROGRAM_KEY, Command, create_account, decompile_create_account, DecompiledCreateAccount

__all__ = [
    'PROGRAM_KEY',
    'Command',
    'create_account',
    'decompile_create_account',
    'DecompiledCreateAccount',
]
