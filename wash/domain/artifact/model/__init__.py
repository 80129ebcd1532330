from wash.domain.artifact.model.credentials import (
    Anonymous,
    BasicAuth,
    Credentials,
    resolve_credentials,
)
from wash.domain.artifact.model.digest import Digest, normalize_digest
from wash.domain.artifact.model.kind import ACCEPTED_MEDIA_TYPES, ArtifactKind
from wash.domain.artifact.model.package import ImageLayer, ImagePackage
from wash.domain.artifact.model.reference import ArtifactReference

__all__ = [
    "ACCEPTED_MEDIA_TYPES",
    "Anonymous",
    "ArtifactKind",
    "ArtifactReference",
    "BasicAuth",
    "Credentials",
    "Digest",
    "ImageLayer",
    "ImagePackage",
    "normalize_digest",
    "resolve_credentials",
]
