from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable

from wash.domain.shared.model.value import ValueObject
from wash.domain.shared.port import Port


class ClaimsToken(ValueObject):
    """Capability claims embedded in an actor module."""

    jwt: str
    issuer: str
    subject: str
    name: str | None = None
    module_hash: str | None = None
    capabilities: list[str] = []
    metadata: dict[str, Any] = {}


@runtime_checkable
class ClaimsExtractor(Port, Protocol):
    """Read embedded capability claims out of a WebAssembly module."""

    @abstractmethod
    def extract_claims(self, module: bytes) -> ClaimsToken | None:
        """
        Returns:
            The embedded claims, or None if the module carries none

        Raises:
            InvalidArtifactError: If the bytes are not a valid module or the claims are invalid
        """
        ...
