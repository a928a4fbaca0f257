from typing import Optional

from solprobe.error import Error


class ConfirmationResult:
    """The outcome of a submitted :class:`ProvisioningRequest <solprobe.client.composer.ProvisioningRequest>`.

    :param tx_id: The id (first signature) of the submitted transaction.
    :param error: (optional) Why the transaction did not reach the requested commitment. One of
        :exc:`RejectionError <solprobe.error.RejectionError>`, :exc:`TransportError <solprobe.error.TransportError>` or
        :exc:`TransactionTimeoutError <solprobe.error.TransactionTimeoutError>`. If absent, the transaction was
        confirmed.
    """

    def __init__(self, tx_id: bytes, error: Optional[Error] = None):
        self.tx_id = tx_id
        self.error = error

    def __eq__(self, other):
        if not isinstance(other, ConfirmationResult):
            return False

        return (self.tx_id == other.tx_id and
                self.error == other.error)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'tx_id={self.tx_id!r}, error={self.error!r})'

    @property
    def ok(self) -> bool:
        return self.error is None
