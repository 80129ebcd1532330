from wash.domain.artifact.port.archive import ArchiveCodec, ProviderArchive
from wash.domain.artifact.port.claims import ClaimsExtractor, ClaimsToken
from wash.domain.artifact.port.progress import ProgressReporter, SilentProgress
from wash.domain.artifact.port.transport import RegistryTransport

__all__ = [
    "ArchiveCodec",
    "ClaimsExtractor",
    "ClaimsToken",
    "ProgressReporter",
    "ProviderArchive",
    "RegistryTransport",
    "SilentProgress",
]
