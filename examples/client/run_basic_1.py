import argparse
import asyncio

from solprobe.client import Client, Environment, compose_atomic, compose_program_call
from solprobe.error import Error
from solprobe.keys import PrivateKey, PublicKey
from solprobe.program import basic_1

ap = argparse.ArgumentParser()
ap.add_argument('-k', '--key', required=True, help='The funding wallet secret key, as comma separated byte values')
ap.add_argument('-p', '--program', required=True, help='The base58-encoded address of the basic-1 program')
ap.add_argument('-e', '--env', default='devnet', help='The cluster to run against (devnet, testnet, localnet)')
ap.add_argument('-v', '--value', type=int, default=1234, help='The value to initialize the account with')
args = vars(ap.parse_args())

wallet = PrivateKey.from_byte_list(args['key'])
program_id = PublicKey.from_base58(args['program'])


async def main():
    async with Client(wallet, env=Environment[args['env'].upper()]) as client:
        account = PrivateKey.random()
        print(f'creating account {account.public_key.to_base58()}')

        lamports = await client.get_minimum_balance_for_rent_exemption(basic_1.ACCOUNT_SIZE)
        request = compose_atomic(client.funder, account, program_id, lamports, basic_1.ACCOUNT_SIZE,
                                 basic_1.initialize(program_id, account.public_key, args['value']))
        result = await client.submit(request)
        if result.error:
            print(f'creation failed: {result.error!r}')
            return

        print(f'account state: {await client.fetch_my_account(account.public_key, program=program_id)}')

        try:
            await client.send(compose_program_call(basic_1.update(program_id, account.public_key, args['value'] + 1)))
        except Error as e:
            print(f'update failed: {e!r}')
            return

        print(f'account state: {await client.fetch_my_account(account.public_key, program=program_id)}')


asyncio.run(main())
