from enum import Enum
from typing import Any, Dict, Optional, Union

from .errors import InvalidUrlError
from .headers import sign_headers
from .presign import UpgradeRequest, build_presigned_request
from .settings import Settings, get_settings
from .types import Body, Credentials, RequestMethod, SigningContext

Headers = Dict[str, Any]


class Service(Enum):
    S3 = 's3'
    DYNAMODB = 'dynamodb'
    LAMBDA = 'lambda'
    IAM = 'iam'
    STS = 'sts'
    EC2 = 'ec2'
    IOT_DATA = 'iotdata'
    EXECUTE_API = 'execute-api'


class SigV4Signer:
    """Signs requests for one set of credentials and one service.

    ``endpoint`` is the default AWS IoT data endpoint used by
    :meth:`presign_mqtt` when none is passed.
    """

    def __init__(
            self,
            access_key: str,
            secret_key: str,
            region: str,
            service: Union[str, Service],
            token: Optional[str] = None,
            endpoint: Optional[str] = None
    ) -> None:
        self.credentials = Credentials(access_key, secret_key, token or '', region)
        self.service = service.value if isinstance(service, Service) else service
        self.endpoint = endpoint

    @classmethod
    def from_settings(
            cls,
            settings: Optional[Settings] = None,
            service: Union[str, Service, None] = None
    ) -> 'SigV4Signer':
        settings = settings or get_settings()
        credentials = settings.credentials()
        return cls(
            credentials.access_key,
            credentials.secret_key,
            credentials.region,
            service or settings.signing_service,
            credentials.session_token,
            settings.iot_endpoint,
        )

    def create_headers(
            self,
            method: str,
            url: str,
            headers: Optional[Headers] = None,
            body: Body = None
    ) -> Headers:
        """Return a signed copy of ``headers`` for ``method url``."""
        context = SigningContext(RequestMethod(method, body), self.service, url, self.credentials)
        signed = {name: str(value) for name, value in (headers or {}).items()}
        return sign_headers(signed, context)

    def presign_mqtt(self, endpoint: Optional[str] = None) -> UpgradeRequest:
        endpoint = endpoint or self.endpoint
        if not endpoint:
            raise InvalidUrlError('', 'no endpoint given and none configured')
        return build_presigned_request(self.credentials, endpoint, service=self.service)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.credentials.access_key!r}, region={self.credentials.region!r}, service={self.service!r})'
