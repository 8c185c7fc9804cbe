"""
AWS flavoured percent-encoding.

SigV4 canonicalization is stricter than form encoding: only the RFC 3986
unreserved set survives, everything else (space included) becomes ``%XX``
with upper-case hex digits.
"""

from typing import Iterable, Tuple, Union

from .errors import EncodingError

UNRESERVED = frozenset(
    b'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    b'abcdefghijklmnopqrstuvwxyz'
    b'0123456789-._~'
)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        try:
            value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(f"Value is not valid UTF-8: {value!r}", e)
        return value
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(f"Value cannot be encoded as UTF-8: {value!r}", e)


def encode(value: Union[str, bytes]) -> str:
    return ''.join(
        chr(byte) if byte in UNRESERVED else f'%{byte:02X}'
        for byte in _to_bytes(value)
    )


def encode_query(pairs: Iterable[Tuple[str, str]]) -> str:
    """Serialize query pairs in the order given, encoding keys and values."""
    return '&'.join(f'{encode(key)}={encode(value)}' for key, value in pairs)
