"""DI provider for the artifact domain."""

from dishka import Provider, from_context, provide

from wash.config import Config
from wash.domain.artifact.command import PullArtifactHandler, PushArtifactHandler
from wash.domain.artifact.port import ProgressReporter
from wash.domain.artifact.service import (
    ArtifactClassifier,
    DigestVerifier,
    ReferencePolicyGuard,
)
from wash.util.di.scope import Scope


class ArtifactProvider(Provider):
    """DI provider for artifact services and handlers."""

    config = from_context(provides=Config, scope=Scope.APP)
    progress = from_context(provides=ProgressReporter, scope=Scope.UOW)

    # Services
    classifier = provide(ArtifactClassifier, scope=Scope.APP)
    policy = provide(ReferencePolicyGuard, scope=Scope.APP)
    verifier = provide(DigestVerifier, scope=Scope.APP)

    # Command Handlers
    pull_handler = provide(PullArtifactHandler, scope=Scope.UOW)
    push_handler = provide(PushArtifactHandler, scope=Scope.UOW)
