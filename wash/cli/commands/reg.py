"""Registry pull/push commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import cyclopts
from cyclopts import Parameter
from pydantic import SecretStr

from wash.application.di import create_container
from wash.cli.console import get_console
from wash.cli.util import exit_on_error, load_config
from wash.config import Config
from wash.domain.artifact.command import (
    ArtifactPulled,
    ArtifactPushed,
    PullArtifact,
    PullArtifactHandler,
    PushArtifact,
    PushArtifactHandler,
)
from wash.domain.artifact.port import ProgressReporter
from wash.domain.shared.command import Command, CommandHandler, Result

app = cyclopts.App(name="reg", help="Interact with OCI compliant registries")

User = Annotated[
    str | None,
    Parameter(
        name=["--user", "-u"],
        help="OCI username, if omitted anonymous authentication will be used",
    ),
]
Password = Annotated[
    str | None,
    Parameter(
        name=["--password", "-p"],
        help="OCI password, if omitted anonymous authentication will be used",
    ),
]
Insecure = Annotated[
    bool,
    Parameter(negative="", help="Allow insecure (HTTP) registry connections"),
]
AllowLatest = Annotated[
    bool,
    Parameter(negative="", help="Allow latest artifact tags"),
]


async def _execute(
    config: Config,
    handler_type: type[CommandHandler],
    cmd: Command,
    message: str,
) -> Result:
    """Run one command handler inside a unit-of-work scope."""
    container = create_container(config)
    try:
        with get_console().status(message) as progress:
            async with container(context={ProgressReporter: progress}) as uow:
                handler = await uow.get(handler_type)
                return await handler.run(cmd)
    finally:
        await container.close()


def _credentials(
    user: str | None, password: str | None, config: Config
) -> tuple[str | None, SecretStr | None]:
    """Command-line credentials, falling back to WASH_REG_USER / WASH_REG_PASSWORD."""
    resolved_user = user if user is not None else config.registry.user
    resolved_password = SecretStr(password) if password is not None else config.registry.password
    return resolved_user, resolved_password


@app.command
def pull(
    url: str,
    /,
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="File destination of artifact"),
    ] = None,
    digest: Annotated[
        str | None,
        Parameter(name=["--digest", "-d"], help="Digest to verify artifact against"),
    ] = None,
    allow_latest: AllowLatest = False,
    user: User = None,
    password: Password = None,
    insecure: Insecure = False,
) -> None:
    """Pull an artifact from an OCI compliant registry.

    Args:
        url: URL of artifact
    """
    with exit_on_error():
        config = load_config(insecure=insecure)
        user, secret = _credentials(user, password, config)
        cmd = PullArtifact(
            reference=url,
            output=output,
            digest=digest,
            allow_latest=allow_latest,
            user=user,
            password=secret,
        )
        result = asyncio.run(_execute(config, PullArtifactHandler, cmd, f"Downloading {url} ..."))

    assert isinstance(result, ArtifactPulled)
    get_console().success(f"\U0001f6bf Successfully pulled and validated {result.path}")


@app.command
def push(
    url: str,
    artifact: Path,
    /,
    *,
    config: Annotated[
        Path | None,
        Parameter(
            name=["--config", "-c"],
            help="Path to config file, if omitted will default to a blank config",
        ),
    ] = None,
    allow_latest: AllowLatest = False,
    user: User = None,
    password: Password = None,
    insecure: Insecure = False,
) -> None:
    """Push an artifact to an OCI compliant registry.

    Args:
        url: URL to push artifact to
        artifact: Path to artifact to push
    """
    with exit_on_error():
        settings = load_config(insecure=insecure)
        user, secret = _credentials(user, password, settings)
        cmd = PushArtifact(
            reference=url,
            artifact=artifact,
            config=config,
            allow_latest=allow_latest,
            user=user,
            password=secret,
        )
        result = asyncio.run(_execute(settings, PushArtifactHandler, cmd, f"Loading {artifact} ..."))

    assert isinstance(result, ArtifactPushed)
    message = f"\U0001f6bf Successfully validated and pushed {artifact}"
    if result.digest:
        message += f" ({result.digest})"
    get_console().success(message)
