"""
Presigned MQTT-over-WebSockets upgrade requests.

A browser-style WebSocket handshake cannot carry the signed headers SigV4
normally uses, so the signature travels in the query string instead.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from .canonical import AWS4_HMAC_SHA256, Canonicalizer
from .encoding import encode_query
from .errors import InvalidUrlError
from .headers import HOST, X_AMZ_DATE, X_AMZ_SECURITY_TOKEN
from .timestamp import Timestamp, capture_now
from .types import Credentials, RequestMethod, SigningContext

logger = logging.getLogger(__name__)

IOT_DATA_SERVICE = 'iotdata'
MQTT_PATH = '/mqtt'

X_AMZ_ALGORITHM = 'X-Amz-Algorithm'
X_AMZ_CREDENTIAL = 'X-Amz-Credential'
X_AMZ_SIGNED_HEADERS = 'X-Amz-SignedHeaders'
X_AMZ_SIGNATURE = 'X-Amz-Signature'


@dataclass(frozen=True)
class UpgradeRequest:
    """A GET request ready to hand to a WebSocket client."""

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = 'GET'

    def query_pairs(self) -> List[Tuple[str, str]]:
        return parse_qsl(urlsplit(self.url).query, keep_blank_values=True)


def build_presigned_request(
        credentials: Credentials,
        endpoint: str,
        timestamp: Optional[Timestamp] = None,
        service: str = IOT_DATA_SERVICE
) -> UpgradeRequest:
    credentials.validate()

    url = f'wss://{endpoint}{MQTT_PATH}'
    context = SigningContext(RequestMethod.get(), service, url, credentials)
    parts = urlsplit(url)
    if parts.path != MQTT_PATH or parts.query or parts.fragment:
        raise InvalidUrlError(url, f'endpoint must be a bare host, got {endpoint!r}')
    timestamp = timestamp or capture_now()

    v4 = Canonicalizer.create(context, timestamp, {HOST: context.host})
    v4 = v4.with_query(X_AMZ_ALGORITHM, AWS4_HMAC_SHA256)
    v4 = v4.with_query(X_AMZ_DATE, timestamp.full_stamp())
    v4 = v4.with_query(X_AMZ_CREDENTIAL, v4.credential_scope_value())
    v4 = v4.with_query(X_AMZ_SIGNED_HEADERS, v4.signed_headers())
    # The signature covers every parameter above; the session token is appended after it.
    v4 = v4.with_query(X_AMZ_SIGNATURE, v4.signature())
    v4 = v4.with_query(X_AMZ_SECURITY_TOKEN, credentials.session_token or '')

    logger.debug("Presigned %s for %s with parameters: %s",
                 url, service, ', '.join(key for key, _ in v4.query))
    return UpgradeRequest(f'{url}?{encode_query(v4.query)}', {HOST: context.host})
