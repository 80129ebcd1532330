from wash.domain.artifact.service.classifier import CLASSIFICATION_ORDER, ArtifactClassifier
from wash.domain.artifact.service.digest import DigestVerifier
from wash.domain.artifact.service.policy import ReferencePolicyGuard

__all__ = [
    "CLASSIFICATION_ORDER",
    "ArtifactClassifier",
    "DigestVerifier",
    "ReferencePolicyGuard",
]
