"""
AWS Signature Version 4 for IoT WebSocket connections

This package signs HTTP request headers with AWS Signature Version 4 and
builds presigned MQTT-over-WebSockets upgrade requests, without depending on
botocore for signing operations.
"""

from .canonical import Canonicalizer
from .errors import EncodingError, InvalidUrlError, MissingCredentialError, SigningError
from .headers import sign_headers
from .presign import UpgradeRequest, build_presigned_request
from .sigv4 import SigV4Signer, Service, Headers
from .timestamp import Timestamp, capture_now
from .types import Credentials, RequestMethod, SigningContext

__version__ = "0.1.0"
__all__ = [
    "SigV4Signer",
    "Service",
    "Headers",
    "Canonicalizer",
    "Credentials",
    "RequestMethod",
    "SigningContext",
    "Timestamp",
    "capture_now",
    "sign_headers",
    "build_presigned_request",
    "UpgradeRequest",
    "SigningError",
    "InvalidUrlError",
    "MissingCredentialError",
    "EncodingError",
]
