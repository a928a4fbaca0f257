from typing import Any, Optional

from solprobe.solana.commitment import Commitment


class SignatureStatus:
    """The status of a submitted transaction, as reported by `getSignatureStatuses`.

    :param slot: The slot the transaction was processed in.
    :param confirmations: The number of blocks since the transaction was processed, or None once rooted.
    :param err: The transaction error, if the transaction failed. Kept as reported by the network.
    :param commitment: The highest :class:`Commitment <solprobe.solana.commitment.Commitment>` the transaction has
        reached.
    """

    def __init__(self, slot: int, confirmations: Optional[int], err: Any = None,
                 commitment: Optional[Commitment] = None):
        self.slot = slot
        self.confirmations = confirmations
        self.err = err
        self.commitment = commitment

    def __eq__(self, other):
        if not isinstance(other, SignatureStatus):
            return False

        return (self.slot == other.slot and
                self.confirmations == other.confirmations and
                self.err == other.err and
                self.commitment == other.commitment)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'slot={self.slot}, confirmations={self.confirmations}, err={self.err!r}, ' \
               f'commitment={self.commitment!r})'

    @property
    def failed(self) -> bool:
        return self.err is not None

    @classmethod
    def from_rpc(cls, value: dict) -> 'SignatureStatus':
        return cls(
            value['slot'],
            value.get('confirmations'),
            value.get('err'),
            Commitment.from_rpc(value.get('confirmationStatus')),
        )
