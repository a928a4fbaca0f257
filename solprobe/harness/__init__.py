from .runner import run_all
from .scenarios import ScenarioResult, create_and_initialize_split, create_and_initialize_atomic, \
    create_and_initialize_simplified, update_account, verify_account

__all__ = [
    'run_all',
    'ScenarioResult',
    'create_and_initialize_split',
    'create_and_initialize_atomic',
    'create_and_initialize_simplified',
    'update_account',
    'verify_account',
]
