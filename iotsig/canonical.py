"""
Canonical request construction and signature derivation.

See https://docs.aws.amazon.com/IAM/latest/UserGuide/create-signed-request.html
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import unquote

from . import digest
from .digest import hmac, join
from .encoding import encode
from .timestamp import Timestamp
from .types import Credentials, SigningContext

logger = logging.getLogger(__name__)

AWS4_HMAC_SHA256 = 'AWS4-HMAC-SHA256'
AWS4_REQUEST = 'aws4_request'
S3_SERVICE = 's3'

Pairs = Tuple[Tuple[str, str], ...]


def _header_value(value: str) -> str:
    return ' '.join(str(value).split())


def _fold_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    # Names differing only by case are the same header once canonicalized.
    folded: Dict[str, str] = {}
    for name, value in headers.items():
        lname = name.lower().strip()
        value = _header_value(value)
        folded[lname] = f'{folded[lname]},{value}' if lname in folded else value
    return folded


def _remove_dot_segments(path: str) -> str:
    # RFC 3986 section 5.2.4; AWS also drops empty segments from repeated slashes.
    segments: List[str] = []
    for segment in path.split('/'):
        if segment == '..':
            if segments:
                segments.pop()
        elif segment and segment != '.':
            segments.append(segment)
    trailing = '/' if path.endswith('/') and segments else ''
    return '/' + '/'.join(segments) + trailing


@dataclass(frozen=True)
class Canonicalizer:
    """Immutable snapshot of one signing operation.

    Every method is a pure function of the context, the timestamp and the
    header/query snapshots taken at construction.
    """

    context: SigningContext
    timestamp: Timestamp
    headers: Pairs = ()
    query: Pairs = ()

    @classmethod
    def create(
            cls,
            context: SigningContext,
            timestamp: Timestamp,
            headers: Optional[Mapping[str, str]] = None,
            query: Optional[Iterable[Tuple[str, str]]] = None
    ) -> 'Canonicalizer':
        if query is None:
            query = context.query_pairs
        return cls(
            context,
            timestamp,
            tuple(_fold_headers(headers or {}).items()),
            tuple((str(k), str(v)) for k, v in query),
        )

    def with_query(self, key: str, value: str) -> 'Canonicalizer':
        return replace(self, query=self.query + ((key, value),))

    @property
    def _credentials(self) -> Credentials:
        return self.context.credentials

    def scope(self) -> str:
        return '/'.join([
            self.timestamp.date_stamp(),
            self._credentials.region,
            self.context.service,
            AWS4_REQUEST,
        ])

    def credential_scope_value(self) -> str:
        return f'{self._credentials.access_key}/{self.scope()}'

    def canonical_uri(self) -> str:
        """Path component of the canonical request.

        S3 signs the path as sent: existing escapes are decoded and every
        segment encoded once. Every other service signs the normalized path
        with each segment encoded as-is, so ``%20`` becomes ``%2520``.
        """
        path = self.context.uri_path
        if self.context.service == S3_SERVICE:
            return '/'.join(encode(unquote(segment)) for segment in path.split('/'))
        return '/'.join(encode(segment) for segment in _remove_dot_segments(path).split('/'))

    def signed_headers(self) -> str:
        return join((name for name, _ in self.headers), ';')

    def canonical_headers(self) -> str:
        return join(
            (f'{name}:{value}' for name, value in self.headers),
            '\n',
            key=lambda line: line.partition(':')[0],
        )

    def canonical_query(self) -> str:
        # Sort by encoded key, then encoded value for repeated keys.
        return join(
            (f'{encode(k)}={encode(v)}' for k, v in self.query),
            '&',
            key=lambda pair: tuple(pair.split('=', 1)),
        )

    def canonical_request(self) -> str:
        return '\n'.join([
            str(self.context.method),
            self.canonical_uri(),
            self.canonical_query(),
            self.canonical_headers(),
            '',
            self.signed_headers(),
            self.context.method.hash_body(),
        ])

    def string_to_sign(self) -> str:
        canonical_request = self.canonical_request()
        logger.debug('CanonicalRequest:\n%s', canonical_request)
        return '\n'.join([
            AWS4_HMAC_SHA256,
            self.timestamp.full_stamp(),
            self.scope(),
            digest.hash(canonical_request),
        ])

    def derive_signing_key(self) -> bytes:
        k_date = hmac(f'AWS4{self._credentials.secret_key}'.encode('utf-8'), self.timestamp.date_stamp())
        k_region = hmac(k_date, self._credentials.region)
        k_service = hmac(k_region, self.context.service)
        return hmac(k_service, AWS4_REQUEST)

    def signature(self) -> str:
        string_to_sign = self.string_to_sign()
        logger.debug('StringToSign:\n%s', string_to_sign)
        return hmac(self.derive_signing_key(), string_to_sign).hex()

    def authorization_header(self) -> str:
        return (
            f'{AWS4_HMAC_SHA256} Credential={self.credential_scope_value()}, '
            f'SignedHeaders={self.signed_headers()},'
            f'Signature={self.signature()}'
        )
