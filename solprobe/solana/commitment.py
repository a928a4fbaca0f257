from enum import IntEnum
from typing import Optional


class Commitment(IntEnum):
    """Used to indicate to Solana nodes which bank state to query, and how far a transaction has progressed.
    See: https://docs.solana.com/api/http#configuring-state-commitment

    Values are ordered: a transaction observed at FINALIZED also satisfies CONFIRMED and PROCESSED.

    PROCESSED: The node will query its most recent block. The block may still be skipped by the cluster.
    CONFIRMED: The node will query the most recent block that has been voted on by supermajority of the cluster.
    FINALIZED: The node will query the most recent block confirmed by supermajority of the cluster as having reached
        maximum lockout. This block will not be rolled back.
    """
    PROCESSED = 0
    CONFIRMED = 1
    FINALIZED = 2

    def to_rpc(self) -> str:
        return self.name.lower()

    @classmethod
    def from_rpc(cls, value: Optional[str]) -> Optional['Commitment']:
        """Parses a `confirmationStatus` value. Returns None for a missing status.
        """
        if value is None:
            return None

        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f'unknown commitment value of {value}')

    def is_satisfied_by(self, observed: Optional['Commitment']) -> bool:
        return observed is not None and observed >= self
