import os
from typing import Mapping, Optional

from solprobe.client.confirmation import ConfirmationConfig
from solprobe.client.environment import Environment, ENDPOINTS
from solprobe.error import ConfigError
from solprobe.keys import PrivateKey, PublicKey
from solprobe.solana import Commitment


class HarnessConfig:
    """Everything needed to run the scenarios against a cluster.

    :param endpoint: The JSON-RPC endpoint URL.
    :param wallet: The funding wallet.
    :param program_id: The address of the deployed basic-1 program.
    :param commitment: (optional) The commitment to wait for and read at. Defaults to Commitment.FINALIZED.
    :param confirmation: (optional) The :class:`ConfirmationConfig <solprobe.client.confirmation.ConfirmationConfig>`.
    """

    def __init__(self, endpoint: str, wallet: PrivateKey, program_id: PublicKey,
                 commitment: Commitment = Commitment.FINALIZED, confirmation: Optional[ConfirmationConfig] = None):
        self.endpoint = endpoint
        self.wallet = wallet
        self.program_id = program_id
        self.commitment = commitment
        self.confirmation = confirmation if confirmation else ConfirmationConfig()

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'endpoint={self.endpoint!r}, wallet={self.wallet.public_key.to_base58()}, ' \
               f'program_id={self.program_id.to_base58()}, commitment={self.commitment.to_rpc()}, ' \
               f'confirmation={self.confirmation!r})'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'HarnessConfig':
        """Loads the configuration from environment variables:

        - `RPC_URL`: the JSON-RPC endpoint. If unset, the default endpoint of `SOLANA_ENV` (devnet by default).
        - `KEY`: the funding wallet's secret key, as comma separated byte values. Required.
        - `PROGRAM_ID`: the base58 address of the basic-1 program. Required.
        - `COMMITMENT`: processed, confirmed or finalized. Defaults to finalized.
        - `CONFIRM_TIMEOUT`, `CONFIRM_MIN_DELAY`, `CONFIRM_MAX_DELAY`: see
          :class:`ConfirmationConfig <solprobe.client.confirmation.ConfirmationConfig>`.

        :raise: :exc:`ConfigError <solprobe.error.ConfigError>`
        """
        environ = os.environ if environ is None else environ

        endpoint = environ.get('RPC_URL')
        if not endpoint:
            env_name = environ.get('SOLANA_ENV', Environment.DEVNET.name)
            try:
                endpoint = ENDPOINTS[Environment[env_name.upper()]]
            except KeyError:
                raise ConfigError(f'unknown SOLANA_ENV: {env_name}')

        if not environ.get('KEY'):
            raise ConfigError('KEY must be set to the funding wallet secret key')
        if not environ.get('PROGRAM_ID'):
            raise ConfigError('PROGRAM_ID must be set to the basic-1 program address')

        try:
            wallet = PrivateKey.from_byte_list(environ['KEY'])
        except ValueError as e:
            raise ConfigError(f'invalid KEY: {e}') from e

        try:
            program_id = PublicKey.from_base58(environ['PROGRAM_ID'])
        except ValueError as e:
            raise ConfigError(f'invalid PROGRAM_ID: {e}') from e

        try:
            commitment = Commitment.from_rpc(environ.get('COMMITMENT', 'finalized'))
        except ValueError as e:
            raise ConfigError(str(e)) from e

        confirmation = ConfirmationConfig(
            max_wait=_float(environ, 'CONFIRM_TIMEOUT'),
            min_delay=_float(environ, 'CONFIRM_MIN_DELAY'),
            max_delay=_float(environ, 'CONFIRM_MAX_DELAY'),
        )
        return cls(endpoint, wallet, program_id, commitment, confirmation)


def _float(environ: Mapping[str, str], name: str) -> Optional[float]:
    value = environ.get(name)
    if not value:
        return None

    try:
        return float(value)
    except ValueError:
        raise ConfigError(f'{name} must be a number, got {value!r}')
