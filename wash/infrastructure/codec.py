from dishka import Provider, provide

from wash.domain.artifact.port import ArchiveCodec, ClaimsExtractor
from wash.infrastructure.par import TarArchiveCodec
from wash.infrastructure.wasm import WascapClaimsExtractor
from wash.util.di.scope import Scope


class CodecProvider(Provider):
    """Artifact format adapters (stateless, process lifetime)."""

    @provide(scope=Scope.APP)
    def get_claims_extractor(self) -> ClaimsExtractor:
        return WascapClaimsExtractor()

    @provide(scope=Scope.APP)
    def get_archive_codec(self) -> ArchiveCodec:
        return TarArchiveCodec()
