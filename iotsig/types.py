from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from urllib.parse import SplitResult, parse_qsl, urlsplit

from . import digest
from .errors import InvalidUrlError, MissingCredentialError

Body = Union[str, bytes, None]

DEFAULT_PORTS = {
    'http': 80,
    'ws': 80,
    'https': 443,
    'wss': 443,
}


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str = field(repr=False)
    session_token: str = field(default='', repr=False)
    region: str = 'us-east-1'

    def validate(self) -> None:
        for name in ('access_key', 'secret_key', 'region'):
            if not getattr(self, name):
                raise MissingCredentialError(name)


@dataclass(frozen=True)
class RequestMethod:
    """An HTTP verb together with the body it carries, if any."""

    verb: str
    body: Body = None

    @classmethod
    def get(cls) -> 'RequestMethod':
        return cls('GET')

    @classmethod
    def delete(cls) -> 'RequestMethod':
        return cls('DELETE')

    @classmethod
    def post(cls, body: Body = None) -> 'RequestMethod':
        return cls('POST', body)

    @classmethod
    def put(cls, body: Body = None) -> 'RequestMethod':
        return cls('PUT', body)

    def hash_body(self) -> str:
        return digest.hash(self.body or b'')

    def __str__(self) -> str:
        return self.verb.upper()


@dataclass(frozen=True)
class SigningContext:
    """Everything one signing operation needs apart from the clock.

    The URL is parsed on construction so that a malformed target fails before
    any signing work starts.
    """

    method: RequestMethod
    service: str
    url: str
    credentials: Credentials
    _parts: SplitResult = field(init=False, repr=False, compare=False)
    _host: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            parts = urlsplit(self.url)
            hostname = parts.hostname
            port = parts.port
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidUrlError(str(self.url), str(e)) from e
        if not hostname:
            raise InvalidUrlError(self.url, 'no host')

        host = f'[{hostname}]' if ':' in hostname else hostname
        if port is not None and port != DEFAULT_PORTS.get(parts.scheme):
            host = f'{host}:{port}'

        object.__setattr__(self, '_parts', parts)
        object.__setattr__(self, '_host', host)

    @property
    def host(self) -> str:
        return self._host

    @property
    def uri_path(self) -> str:
        return self._parts.path or '/'

    @property
    def query_pairs(self) -> List[Tuple[str, str]]:
        return parse_qsl(self._parts.query, keep_blank_values=True)

    @property
    def region(self) -> str:
        return self.credentials.region

    @classmethod
    def create(
            cls,
            method: Union[str, RequestMethod],
            url: str,
            service: str,
            credentials: Credentials,
            body: Optional[Body] = None
    ) -> 'SigningContext':
        if not isinstance(method, RequestMethod):
            method = RequestMethod(method, body)
        return cls(method, service, url, credentials)
