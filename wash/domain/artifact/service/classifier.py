"""Artifact classification.

Classification is a priority-ordered sequence of validation attempts, not a
mutually exclusive match: the first kind whose validator accepts the bytes
wins. Bytes that would satisfy both validators are therefore always a
WebAssembly module.
"""

import logging
from collections.abc import Callable

from wash.domain.artifact.model import ArtifactKind
from wash.domain.artifact.port import ArchiveCodec, ClaimsExtractor
from wash.domain.shared.error import InvalidArtifactError, UnsupportedArtifactError
from wash.domain.shared.service import Service

logger = logging.getLogger(__name__)

CLASSIFICATION_ORDER: tuple[ArtifactKind, ...] = (
    ArtifactKind.WASM_MODULE,
    ArtifactKind.PROVIDER_ARCHIVE,
)


class ArtifactClassifier(Service):
    """Determines which kind of artifact a byte buffer holds."""

    claims_extractor: ClaimsExtractor
    archive_codec: ArchiveCodec

    def attempts(self) -> list[tuple[ArtifactKind, Callable[[bytes, str], None]]]:
        """(kind, validator) pairs in CLASSIFICATION_ORDER."""
        validators = {
            ArtifactKind.WASM_MODULE: self.validate_actor_module,
            ArtifactKind.PROVIDER_ARCHIVE: self.validate_provider_archive,
        }
        return [(kind, validators[kind]) for kind in CLASSIFICATION_ORDER]

    def classify(self, artifact: bytes, label: str) -> ArtifactKind:
        """
        Classify raw artifact bytes.

        Args:
            artifact: The artifact contents
            label: Name used in diagnostics (repository or file path)

        Returns:
            The first ArtifactKind whose validator accepts the bytes

        Raises:
            UnsupportedArtifactError: If no validator accepts the bytes
        """
        for kind, validate in self.attempts():
            try:
                validate(artifact, label)
            except InvalidArtifactError as e:
                logger.debug("%s is not a %s: %s", label, kind.value, e.message)
                continue
            logger.debug("Classified %s as %s", label, kind.value)
            return kind

        raise UnsupportedArtifactError(label)

    def validate_actor_module(self, artifact: bytes, label: str) -> None:
        """Fails unless the bytes are a module with embedded capability claims."""
        token = self.claims_extractor.extract_claims(artifact)
        if token is None:
            raise InvalidArtifactError(f"No capabilities discovered in actor module : {label}")

    def validate_provider_archive(self, artifact: bytes, label: str) -> None:
        """Fails unless the bytes load as a provider archive."""
        try:
            self.archive_codec.try_load(artifact)
        except InvalidArtifactError as e:
            raise InvalidArtifactError(f"Invalid provider archive : {label}") from e
