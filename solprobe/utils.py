import sys
from typing import Tuple

_USER_AGENT_HEADER = 'solprobe-user-agent'


def user_agent(version) -> Tuple[str, str]:
    return (
        _USER_AGENT_HEADER,
        f'solprobe/{version} python/{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}-'
        f'{sys.version_info.releaselevel}'
    )
