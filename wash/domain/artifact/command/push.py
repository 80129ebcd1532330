from pathlib import Path

import logfire
from pydantic import SecretStr

from wash.domain.artifact.model import (
    ArtifactKind,
    ArtifactReference,
    ImageLayer,
    ImagePackage,
    resolve_credentials,
)
from wash.domain.artifact.port import ProgressReporter, RegistryTransport
from wash.domain.artifact.service import ArtifactClassifier, ReferencePolicyGuard
from wash.domain.shared.command import Command, CommandHandler, Result
from wash.domain.shared.error import ArtifactIOError, ValidationError

# Sent when no config file is given
DEFAULT_CONFIG = b"{}"


class PushArtifact(Command):
    reference: str
    artifact: Path
    config: Path | None = None
    allow_latest: bool = False
    user: str | None = None
    password: SecretStr | None = None


class ArtifactPushed(Result):
    reference: str
    kind: ArtifactKind
    digest: str | None  # As assigned by the registry
    size: int


def _read_file(path: Path, what: str) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ArtifactIOError(f"Failed to read {what} {path}: {e}", path=str(path)) from e


class PushArtifactHandler(CommandHandler[PushArtifact, ArtifactPushed]):
    """Loads, classifies, packages and uploads an artifact.

    Classification failures abort before any network call.
    """

    transport: RegistryTransport
    classifier: ArtifactClassifier
    policy: ReferencePolicyGuard
    progress: ProgressReporter

    async def run(self, cmd: PushArtifact) -> ArtifactPushed:
        image = ArtifactReference.parse(cmd.reference)
        if image.tag is None:
            raise ValidationError(
                f"Artifact reference '{cmd.reference}' has no tag; pushing requires an explicit tag",
                field="tag",
            )
        self.policy.check_mutability_policy(image, cmd.allow_latest, operation="push")

        with logfire.span("PushArtifact", reference=image.whole()):
            self.progress.report(f"Loading {cmd.artifact} ...")
            config = _read_file(cmd.config, "config") if cmd.config else DEFAULT_CONFIG
            artifact = _read_file(cmd.artifact, "artifact")

            self.progress.report(f"Verifying {cmd.artifact} ...")
            kind = self.classifier.classify(artifact, str(cmd.artifact))

            package = ImagePackage(
                layers=[ImageLayer(data=artifact, media_type=kind.media_type)],
                digest=None,
            )
            credentials = resolve_credentials(cmd.user, cmd.password)

            self.progress.report(f"Pushing {cmd.artifact} to {image.whole()} ...")
            digest = await self.transport.push(
                image,
                package,
                config,
                kind.config_media_type,
                credentials,
            )

            logfire.info(
                "Artifact pushed",
                reference=image.whole(),
                kind=kind.value,
                digest=digest,
                size=len(artifact),
            )

        return ArtifactPushed(
            reference=image.whole(),
            kind=kind,
            digest=digest,
            size=len(artifact),
        )
