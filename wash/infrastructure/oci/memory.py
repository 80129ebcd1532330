import hashlib
import json
from dataclasses import dataclass, field

from wash.domain.artifact.model import ArtifactReference, Credentials, Digest, ImagePackage
from wash.domain.artifact.port import RegistryTransport
from wash.domain.shared.error import TransportError


@dataclass
class StoredArtifact:
    package: ImagePackage
    config: bytes
    config_media_type: str


def _manifest_digest(package: ImagePackage, config: bytes, config_media_type: str) -> str:
    manifest = {
        "config": {
            "mediaType": config_media_type,
            "digest": f"sha256:{hashlib.sha256(config).hexdigest()}",
        },
        "layers": [
            {
                "mediaType": layer.media_type,
                "digest": f"sha256:{hashlib.sha256(layer.data).hexdigest()}",
                "size": len(layer.data),
            }
            for layer in package.layers
        ],
    }
    encoded = json.dumps(manifest, sort_keys=True, separators=(",", ":")).encode()
    return str(Digest(hashlib.sha256(encoded).hexdigest()))


@dataclass
class InMemoryRegistryTransport(RegistryTransport):
    """Dictionary-backed registry keyed by registry/repository:tag."""

    artifacts: dict[str, StoredArtifact] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    @staticmethod
    def _key(reference: ArtifactReference) -> str:
        return f"{reference.registry}/{reference.repository}:{reference.resolved_tag}"

    async def pull(
        self,
        reference: ArtifactReference,
        credentials: Credentials,
        accepted_media_types: list[str],
    ) -> ImagePackage:
        self.calls.append(("pull", reference.whole()))
        stored = self.artifacts.get(self._key(reference))
        if stored is None:
            raise TransportError(f"manifest unknown: {reference.whole()}")
        if reference.digest is not None and reference.digest != stored.package.digest:
            raise TransportError(f"manifest unknown: {reference.whole()}")
        for layer in stored.package.layers:
            if layer.media_type not in accepted_media_types:
                raise TransportError(
                    f"Incompatible layer media type {layer.media_type!r} in {reference.whole()}"
                )
        return stored.package

    async def push(
        self,
        reference: ArtifactReference,
        package: ImagePackage,
        config: bytes,
        config_media_type: str,
        credentials: Credentials,
    ) -> str | None:
        self.calls.append(("push", reference.whole()))
        digest = _manifest_digest(package, config, config_media_type)
        self.artifacts[self._key(reference)] = StoredArtifact(
            package=package.model_copy(update={"digest": digest}),
            config=config,
            config_media_type=config_media_type,
        )
        return digest
