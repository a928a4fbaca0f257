import argparse
import asyncio
import logging
from typing import List, Optional

from solprobe.client import Client
from solprobe.config import HarnessConfig
from solprobe.error import Error
from solprobe.harness import scenarios
from solprobe.keys import PublicKey

logger = logging.getLogger(__name__)

INITIAL_VALUE = 1234
UPDATED_VALUE = 4321


async def run_all(
    client: Client, program_id: PublicKey, initial: int = INITIAL_VALUE, updated: int = UPDATED_VALUE,
) -> List[scenarios.ScenarioResult]:
    """Runs every scenario in order. The first failure aborts the run.

    :return: The results of the scenarios, in the order they ran.
    """
    results = []
    for scenario in (scenarios.create_and_initialize_split, scenarios.create_and_initialize_atomic,
                     scenarios.create_and_initialize_simplified):
        result = await scenario(client, program_id, initial)
        logger.info('passed: %s (%s)', result.name, result.account.public_key.to_base58())
        results.append(result)

    # The simplified scenario's account is the one that gets updated.
    result = await scenarios.update_account(client, program_id, results[-1].account, updated)
    logger.info('passed: %s (%s)', result.name, result.account.public_key.to_base58())
    results.append(result)

    return results


async def run(config: HarnessConfig) -> List[scenarios.ScenarioResult]:
    async with Client(config.wallet, endpoint=config.endpoint, confirmation_config=config.confirmation,
                      default_commitment=config.commitment) as client:
        return await run_all(client, config.program_id)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description='Runs the basic-1 provisioning scenarios against a cluster. The cluster, '
                                             'wallet and program are read from RPC_URL, KEY and PROGRAM_ID.')
    ap.add_argument('-v', '--verbose', action='store_true', help='Log every RPC call and poll')
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = HarnessConfig.from_env()
        logger.info('running against %s', config.endpoint)
        asyncio.run(run(config))
    except Error as e:
        logger.error('failed: %s: %s', e.__class__.__name__, e.message)
        return 1

    return 0
