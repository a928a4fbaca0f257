from solprobe.model import SignatureStatus, ConfirmationResult
from solprobe.error import TransactionTimeoutError
from solprobe.solana import Commitment


class TestSignatureStatus:
    def test_from_rpc(self):
        status = SignatureStatus.from_rpc({
            'slot': 72,
            'confirmations': 10,
            'err': None,
            'status': {'Ok': None},
            'confirmationStatus': 'confirmed',
        })
        assert status == SignatureStatus(72, 10, None, Commitment.CONFIRMED)
        assert not status.failed

    def test_from_rpc_failed(self):
        err = {'InstructionError': [0, {'Custom': 0}]}
        status = SignatureStatus.from_rpc({'slot': 48, 'confirmations': None, 'err': err})
        assert status.failed
        assert status.err == err
        assert status.commitment is None


class TestConfirmationResult:
    def test_ok(self):
        assert ConfirmationResult(b'tx').ok

        e = TransactionTimeoutError('timed out', tx_id=b'tx')
        result = ConfirmationResult(b'tx', e)
        assert not result.ok
        assert result.error is e
