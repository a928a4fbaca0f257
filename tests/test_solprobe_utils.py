import sys

from solprobe.utils import user_agent
from solprobe.version import VERSION


def test_user_agent():
    header, value = user_agent(VERSION)
    assert header == 'solprobe-user-agent'
    assert value.startswith(f'solprobe/{VERSION} python/{sys.version_info.major}.')
