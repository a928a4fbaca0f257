import base64

from solprobe.keys import PublicKey


class AccountInfo:
    """The raw state of an on-chain account.

    :param account_id: The address of the account.
    :param data: The account data.
    :param owner: The program that owns the account.
    :param lamports: The balance of the account, in lamports.
    :param executable: Whether the account holds a program.
    """

    def __init__(self, account_id: PublicKey, data: bytes, owner: PublicKey, lamports: int, executable: bool = False):
        self.account_id = account_id
        self.data = data
        self.owner = owner
        self.lamports = lamports
        self.executable = executable

    def __eq__(self, other):
        if not isinstance(other, AccountInfo):
            return False

        return (self.account_id == other.account_id and
                self.data == other.data and
                self.owner == other.owner and
                self.lamports == other.lamports and
                self.executable == other.executable)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'account_id={self.account_id!r}, data={self.data.hex()}, owner={self.owner!r}, ' \
               f'lamports={self.lamports}, executable={self.executable})'

    @classmethod
    def from_rpc(cls, account_id: PublicKey, value: dict) -> 'AccountInfo':
        """Parses the `value` member of a base64 encoded `getAccountInfo` response.
        """
        data, encoding = value['data']
        if encoding != 'base64':
            raise ValueError(f'unsupported account data encoding: {encoding}')

        return cls(
            account_id,
            base64.b64decode(data),
            PublicKey.from_base58(value['owner']),
            value['lamports'],
            value.get('executable', False),
        )
