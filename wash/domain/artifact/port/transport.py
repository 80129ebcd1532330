from abc import abstractmethod
from typing import Protocol, runtime_checkable

from wash.domain.artifact.model import ArtifactReference, Credentials, ImagePackage
from wash.domain.shared.port import Port


@runtime_checkable
class RegistryTransport(Port, Protocol):
    """Move packages to and from an OCI distribution registry."""

    @abstractmethod
    async def pull(
        self,
        reference: ArtifactReference,
        credentials: Credentials,
        accepted_media_types: list[str],
    ) -> ImagePackage:
        """
        Download the package a reference points at.

        Args:
            reference: Parsed registry reference
            credentials: Anonymous or basic credentials
            accepted_media_types: Layer media types the caller can handle

        Returns:
            ImagePackage with the matching layers in manifest order and the
            digest the registry reported for the manifest

        Raises:
            AuthenticationError: If the registry rejects the credentials
            TransportError: For any other registry or network failure
        """
        ...

    @abstractmethod
    async def push(
        self,
        reference: ArtifactReference,
        package: ImagePackage,
        config: bytes,
        config_media_type: str,
        credentials: Credentials,
    ) -> str | None:
        """
        Upload a package and tag it with the reference.

        Returns:
            The manifest digest assigned by the registry, if it reported one

        Raises:
            AuthenticationError: If the registry rejects the credentials
            TransportError: For any other registry or network failure
        """
        ...
