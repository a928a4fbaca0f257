from enum import Enum


class Environment(Enum):
    """A Solana cluster.
    """

    MAINNET = 1

    DEVNET = 2

    TESTNET = 3

    # A solana-test-validator running on this machine.
    LOCALNET = 4


ENDPOINTS = {
    Environment.MAINNET: 'https://api.mainnet-beta.solana.com',
    Environment.DEVNET: 'https://api.devnet.solana.com',
    Environment.TESTNET: 'https://api.testnet.solana.com',
    Environment.LOCALNET: 'http://127.0.0.1:8899',
}
