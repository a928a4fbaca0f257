from typing import List, Optional

from solprobe.keys import PublicKey


class AccountMeta:
    """Describes how an instruction uses an account.

    :param public_key: The :class:`PublicKey <solprobe.keys.PublicKey>` of the account.
    :param is_signer: Whether the account must sign the transaction.
    :param is_writable: Whether the instruction may modify the account.
    """

    def __init__(self, public_key: PublicKey, is_signer: bool = False, is_writable: bool = False):
        self.public_key = public_key
        self.is_signer = is_signer
        self.is_writable = is_writable

    def __eq__(self, other):
        if not isinstance(other, AccountMeta):
            return False

        return (self.public_key == other.public_key and
                self.is_signer == other.is_signer and
                self.is_writable == other.is_writable)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'public_key={self.public_key.to_base58()}, is_signer={self.is_signer}, ' \
               f'is_writable={self.is_writable})'

    @classmethod
    def new(cls, pub: PublicKey, is_signer: bool) -> 'AccountMeta':
        """Creates a new :class:`AccountMeta <AccountMeta>` representing a writable account.

        :param pub: the :class:`PublicKey <solprobe.keys.PublicKey>` of the account.
        :param is_signer: indicates whether this account is a signer.
        """
        return cls(pub, is_signer=is_signer, is_writable=True)

    @classmethod
    def new_read_only(cls, pub: PublicKey, is_signer: bool) -> 'AccountMeta':
        """Creates a new :class:`AccountMeta <AccountMeta>` representing a read-only account.

        :param pub: the :class:`PublicKey <solprobe.keys.PublicKey>` of the account.
        :param is_signer: indicates whether this account is a signer.
        """
        return cls(pub, is_signer=is_signer, is_writable=False)


class Instruction:
    """A single call into an on-chain program.

    :param program: The program to invoke.
    :param data: The opaque instruction data passed to the program.
    :param accounts: (optional) The accounts the program will read or write.
    """

    def __init__(self, program: PublicKey, data: bytes, accounts: Optional[List[AccountMeta]] = None):
        self.program = program
        self.data = bytes(data)
        self.accounts = accounts if accounts else []

    def __eq__(self, other):
        if not isinstance(other, Instruction):
            return False

        return (self.program == other.program and
                self.accounts == other.accounts and
                self.data == other.data)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'program={self.program.to_base58()}, data={self.data.hex()}, accounts={self.accounts!r})'

    @property
    def signers(self) -> List[PublicKey]:
        """Returns the accounts that must sign any transaction containing this instruction.
        """
        return [a.public_key for a in self.accounts if a.is_signer]
