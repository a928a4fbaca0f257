import base64

import pytest

from solprobe.model import AccountInfo
from tests.utils import generate_keys


class TestAccountInfo:
    def test_from_rpc(self):
        account_id, owner = [k.public_key for k in generate_keys(2)]
        value = {
            'data': [base64.b64encode(b'somedata').decode(), 'base64'],
            'executable': False,
            'lamports': 1000,
            'owner': owner.to_base58(),
            'rentEpoch': 0,
        }

        info = AccountInfo.from_rpc(account_id, value)
        assert info == AccountInfo(account_id, b'somedata', owner, 1000)

    def test_from_rpc_unsupported_encoding(self):
        account_id, owner = [k.public_key for k in generate_keys(2)]
        with pytest.raises(ValueError):
            AccountInfo.from_rpc(account_id, {'data': ['', 'base58'], 'owner': owner.to_base58(), 'lamports': 0})
