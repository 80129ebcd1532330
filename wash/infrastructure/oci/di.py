from dishka import Provider, provide

from wash.config import Config
from wash.domain.artifact.port import RegistryTransport
from wash.infrastructure.oci.transport import OrasRegistryTransport
from wash.util.di.scope import Scope


class OciProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_transport(self, config: Config) -> RegistryTransport:
        return OrasRegistryTransport(
            insecure=config.registry.insecure,
            tls_verify=config.registry.tls_verify,
        )
