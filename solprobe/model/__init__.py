from .account import AccountInfo
from .result import ConfirmationResult
from .transaction import SignatureStatus

__all__ = [
    'AccountInfo',
    'ConfirmationResult',
    'SignatureStatus',
]
