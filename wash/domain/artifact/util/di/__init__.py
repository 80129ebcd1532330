from wash.domain.artifact.util.di.provider import ArtifactProvider

__all__ = ["ArtifactProvider"]
