from .client import Client
from .composer import ProvisioningRequest, compose_atomic, compose_split, compose_program_call, compose_with_create
from .confirmation import ConfirmationConfig
from .environment import Environment

__all__ = [
    'Client',
    'ProvisioningRequest',
    'compose_atomic',
    'compose_split',
    'compose_program_call',
    'compose_with_create',
    'ConfirmationConfig',
    'Environment',
]
