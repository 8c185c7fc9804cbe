import hashlib
import hmac as _hmac
from typing import Any, Callable, Iterable, Optional, Union


def hash(message: Union[bytes, str]) -> str:
    if isinstance(message, str):
        message = message.encode('utf-8')
    return hashlib.sha256(message).hexdigest()


def hmac(key: bytes, message: str) -> bytes:
    return _hmac.new(key, message.encode('utf-8'), hashlib.sha256).digest()


def join(items: Iterable[str], separator: str, key: Optional[Callable[[str], Any]] = None) -> str:
    """Join ``items`` in ascending order of ``key`` (the item itself by default).

    Canonical headers and query strings must be sorted by their key, so the
    ordering is always made explicit here instead of trusting the iteration
    order of whatever collection the items came from.
    """
    return separator.join(sorted(items, key=key))
