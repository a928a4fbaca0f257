import pytest

from solprobe.retry import Backoff, ExponentialBackoff, BinaryExponentialBackoff


class TestBackoff:
    def test_get_backoff(self):
        with pytest.raises(NotImplementedError):
            Backoff().get_backoff(1)

    def test_exponential(self):
        b = ExponentialBackoff(0.5, 3)
        assert [b.get_backoff(i) for i in range(1, 5)] == [0.5, 1.5, 4.5, 13.5]

    def test_binary_exponential(self):
        b = BinaryExponentialBackoff(0.5)
        assert [b.get_backoff(i) for i in range(1, 5)] == [0.5, 1, 2, 4]
