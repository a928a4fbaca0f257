from typing import Tuple

_MAX_UINT16 = 2 ** 16 - 1
_MAX_ENCODED_SIZE = 3


def encode_length(b: bytearray, length: int) -> int:
    """Appends the compact-u16 ("shortvec") encoding of `length` to `b`.

    :param b: The byte array to encode the length into.
    :param length: The length to encode. Must be in the range [0, 2**16).
    :return: The number of bytes written to the array.
    """
    if length < 0 or length > _MAX_UINT16:
        raise ValueError(f'length must be in the range [0, {_MAX_UINT16}]')

    written = 0
    while length >= 0x80:
        b.append((length & 0x7f) | 0x80)
        length >>= 7
        written += 1

    b.append(length)
    return written + 1


def decode_length(b: bytes) -> Tuple[int, int]:
    """Decodes a compact-u16 length from the start of `b`.

    :param b: The encoded bytes.
    :return: The decoded length and the number of bytes it occupied.
    """
    length = 0
    for offset, val in enumerate(b[:_MAX_ENCODED_SIZE]):
        length |= (val & 0x7f) << (offset * 7)
        if not val & 0x80:
            return length, offset + 1

    if len(b) < _MAX_ENCODED_SIZE:
        raise ValueError('unexpected end of shortvec')

    raise ValueError(f'invalid size: more than {_MAX_ENCODED_SIZE} bytes')
