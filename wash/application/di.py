from dishka import AsyncContainer, make_async_container

from wash.config import Config
from wash.domain.artifact.util.di import ArtifactProvider
from wash.infrastructure.codec import CodecProvider
from wash.infrastructure.oci import OciProvider
from wash.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ArtifactProvider(),
        CodecProvider(),
        OciProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
