from typing import List, Optional, Tuple

from solprobe.keys import PrivateKey, PublicKey
from solprobe.solana import system
from solprobe.solana.instruction import Instruction
from solprobe.solana.transaction import Transaction


class ProvisioningRequest:
    """An ordered list of instructions to be submitted as a single transaction, together with the keys that must
    co-sign it. The funding wallet pays for and signs every request, so it is never listed here.

    :param instructions: The instructions, in execution order.
    :param signers: (optional) The co-signers, in addition to the funding wallet.
    """

    def __init__(self, instructions: List[Instruction], signers: Optional[List[PrivateKey]] = None):
        if not instructions:
            raise ValueError('a request must contain at least 1 instruction')

        self.instructions = instructions
        self.signers = signers if signers else []

    def __eq__(self, other):
        if not isinstance(other, ProvisioningRequest):
            return False

        return (self.instructions == other.instructions and
                self.signers == other.signers)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'instructions={self.instructions!r}, signers={[s.public_key for s in self.signers]!r})'

    def created_accounts(self) -> List[PublicKey]:
        """Returns the addresses of the accounts created by this request.
        """
        return [i.accounts[1].public_key for i in self.instructions if _is_create_account(i)]

    def program_instructions(self) -> List[Instruction]:
        return [i for i in self.instructions if i.program != system.PROGRAM_KEY]

    def missing_signers(self) -> List[PublicKey]:
        """Returns the created accounts whose keys are not among the co-signers. The network rejects a request that
        creates an account without that account's signature.
        """
        signers = [s.public_key for s in self.signers]
        return [a for a in self.created_accounts() if a not in signers]

    def to_transaction(self, funder: PublicKey) -> Transaction:
        return Transaction.new(funder, self.instructions)


def compose_program_call(program_instruction: Instruction,
                         signers: Optional[List[PrivateKey]] = None) -> ProvisioningRequest:
    """Composes a request that only invokes the program, e.g. to update an existing account.
    """
    return ProvisioningRequest([program_instruction], signers)


def compose_with_create(create_instruction: Instruction, account: PrivateKey, program_instruction: Instruction,
                        signers: Optional[List[PrivateKey]] = None) -> ProvisioningRequest:
    """Composes an atomic request from an already built `CreateAccount` instruction for `account`.

    :param create_instruction: The system program `CreateAccount` instruction.
    :param account: The key of the account being created. It co-signs the request.
    :param program_instruction: The program instruction to run once the account exists.
    :param signers: (optional) Additional co-signers required by the program instruction.
    """
    if not _is_create_account(create_instruction):
        raise ValueError('expected a system program CreateAccount instruction')

    if create_instruction.accounts[1].public_key != account.public_key:
        raise ValueError('CreateAccount instruction targets a different account')

    return ProvisioningRequest([create_instruction, program_instruction], [account] + (signers or []))


def compose_atomic(
    funder: PublicKey, account: PrivateKey, owner: PublicKey, lamports: int, size: int,
    program_instruction: Instruction, signers: Optional[List[PrivateKey]] = None,
) -> ProvisioningRequest:
    """Composes a single request that creates `account` and then runs `program_instruction`. Either both take effect
    or neither does.

    :param funder: The funding wallet, which pays `lamports` into the new account.
    :param account: The key of the account to create.
    :param owner: The program that will own the new account.
    :param lamports: The initial balance of the account. Should be the rent-exempt minimum for `size`.
    :param size: The account data size, in bytes.
    :param program_instruction: The program instruction to run once the account exists.
    :param signers: (optional) Additional co-signers required by the program instruction.
    """
    create_instruction = system.create_account(funder, account.public_key, owner, lamports, size)
    return compose_with_create(create_instruction, account, program_instruction, signers)


def compose_split(
    funder: PublicKey, account: PrivateKey, owner: PublicKey, lamports: int, size: int,
    program_instruction: Instruction, signers: Optional[List[PrivateKey]] = None,
) -> Tuple[ProvisioningRequest, ProvisioningRequest]:
    """Composes two requests: the first creates `account`, the second runs `program_instruction` against it. The second
    request must only be submitted after the first is confirmed.

    Parameters are the same as :func:`compose_atomic <compose_atomic>`.

    :return: The creation request and the program request.
    """
    create_request = ProvisioningRequest(
        [system.create_account(funder, account.public_key, owner, lamports, size)],
        [account],
    )
    return create_request, compose_program_call(program_instruction, signers)


def _is_create_account(i: Instruction) -> bool:
    return (i.program == system.PROGRAM_KEY and
            len(i.accounts) == 2 and
            len(i.data) >= 4 and
            int.from_bytes(i.data[0:4], 'little') == system.Command.CREATE_ACCOUNT)
