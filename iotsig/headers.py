import logging
from typing import Dict, Optional

from .canonical import Canonicalizer
from .timestamp import Timestamp, capture_now
from .types import SigningContext

logger = logging.getLogger(__name__)

HOST = 'Host'
X_AMZ_DATE = 'X-Amz-Date'
AUTHORIZATION = 'authorization'
X_AMZ_SECURITY_TOKEN = 'X-Amz-Security-Token'
X_AMZ_CONTENT_SHA256 = 'x-amz-content-sha256'


def _set_header(headers: Dict[str, str], name: str, value: str) -> None:
    for existing in [key for key in headers if key.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value


def sign_headers(
        headers: Dict[str, str],
        context: SigningContext,
        timestamp: Optional[Timestamp] = None
) -> Dict[str, str]:
    """Add SigV4 authentication headers to ``headers`` in place.

    The signature covers the headers present when this is called plus
    ``Host``. Anything added to the mapping afterwards is not signed and will
    fail verification on the receiving side.
    """
    context.credentials.validate()

    _set_header(headers, HOST, context.host)
    timestamp = timestamp or capture_now()
    v4 = Canonicalizer.create(context, timestamp, headers)

    _set_header(headers, X_AMZ_DATE, timestamp.full_stamp())
    _set_header(headers, AUTHORIZATION, v4.authorization_header())
    _set_header(headers, X_AMZ_SECURITY_TOKEN, context.credentials.session_token or '')
    _set_header(headers, X_AMZ_CONTENT_SHA256, context.method.hash_body())

    logger.debug("Signed %s %s for service %s with headers: %s",
                 context.method, context.uri_path, context.service, v4.signed_headers())
    return headers
