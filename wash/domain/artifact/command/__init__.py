from wash.domain.artifact.command.pull import ArtifactPulled, PullArtifact, PullArtifactHandler
from wash.domain.artifact.command.push import ArtifactPushed, PushArtifact, PushArtifactHandler

__all__ = [
    "ArtifactPulled",
    "ArtifactPushed",
    "PullArtifact",
    "PullArtifactHandler",
    "PushArtifact",
    "PushArtifactHandler",
]
