from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable

from wash.domain.shared.model.value import ValueObject
from wash.domain.shared.port import Port


class ProviderArchive(ValueObject):
    """A capability provider archive: signed claims plus one binary per target."""

    claims_jwt: str
    claims: dict[str, Any]
    libraries: dict[str, bytes]

    @property
    def targets(self) -> list[str]:
        return sorted(self.libraries)

    @property
    def metadata(self) -> dict[str, Any]:
        wascap = self.claims.get("wascap")
        return wascap if isinstance(wascap, dict) else {}


@runtime_checkable
class ArchiveCodec(Port, Protocol):
    """Parse the provider archive container format."""

    @abstractmethod
    def try_load(self, data: bytes) -> ProviderArchive:
        """
        Raises:
            InvalidArtifactError: If the bytes are not a valid provider archive
        """
        ...
