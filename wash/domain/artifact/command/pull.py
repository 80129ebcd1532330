from pathlib import Path

import logfire
from pydantic import SecretStr

from wash.domain.artifact.model import (
    ACCEPTED_MEDIA_TYPES,
    ArtifactKind,
    ArtifactReference,
    resolve_credentials,
)
from wash.domain.artifact.port import ProgressReporter, RegistryTransport
from wash.domain.artifact.service import (
    ArtifactClassifier,
    DigestVerifier,
    ReferencePolicyGuard,
)
from wash.domain.shared.command import Command, CommandHandler, Result
from wash.domain.shared.error import ArtifactIOError


class PullArtifact(Command):
    reference: str
    output: Path | None = None  # Defaults to <repository name><extension>
    digest: str | None = None  # Expected digest, with or without the sha256: prefix
    allow_latest: bool = False
    user: str | None = None
    password: SecretStr | None = None


class ArtifactPulled(Result):
    path: Path
    kind: ArtifactKind
    reference: str
    digest: str | None
    size: int


class PullArtifactHandler(CommandHandler[PullArtifact, ArtifactPulled]):
    """Downloads, verifies, classifies and writes an artifact to disk.

    Every check runs before the output file is touched; only the final write
    can leave a partial file behind.
    """

    transport: RegistryTransport
    classifier: ArtifactClassifier
    policy: ReferencePolicyGuard
    verifier: DigestVerifier
    progress: ProgressReporter

    async def run(self, cmd: PullArtifact) -> ArtifactPulled:
        image = ArtifactReference.parse(cmd.reference)
        self.policy.check_mutability_policy(image, cmd.allow_latest, operation="pull")

        credentials = resolve_credentials(cmd.user, cmd.password)

        with logfire.span("PullArtifact", reference=image.whole()):
            self.progress.report(f"Downloading {image.whole()} ...")
            package = await self.transport.pull(image, credentials, ACCEPTED_MEDIA_TYPES)

            self.progress.report(f"Validating {image.whole()} ...")
            self.verifier.verify(cmd.digest, package.digest)

            artifact = package.concatenated()
            kind = self.classifier.classify(artifact, image.repository)

            outfile = cmd.output or Path(f"{image.name}{kind.extension}")
            try:
                outfile.write_bytes(artifact)
            except OSError as e:
                raise ArtifactIOError(f"Failed to write {outfile}: {e}", path=str(outfile)) from e

            logfire.info(
                "Artifact pulled",
                reference=image.whole(),
                kind=kind.value,
                path=str(outfile),
                size=len(artifact),
            )

        return ArtifactPulled(
            path=outfile,
            kind=kind,
            reference=image.whole(),
            digest=package.digest,
            size=len(artifact),
        )
