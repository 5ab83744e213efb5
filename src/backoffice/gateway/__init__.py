"""Remote data gateway factory.

Picks the adapter named by the settings:
- FakeGateway for development and testing
- RestGateway for a running backend
"""

from backoffice.config import BackofficeSettings, GatewayKind
from backoffice.gateway.fake_adapter import FakeGateway
from backoffice.gateway.port import RemoteDataGateway
from backoffice.gateway.rest_adapter import RestGateway


def build_gateway(settings: BackofficeSettings) -> RemoteDataGateway:
    if settings.gateway == GatewayKind.REST:
        return RestGateway(settings.api_url, timeout=settings.api_timeout)
    return FakeGateway()
