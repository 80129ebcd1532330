"""Provider archive commands."""

import asyncio
from pathlib import Path

import cyclopts

from wash.application.di import create_container
from wash.cli.console import get_console
from wash.cli.util import exit_on_error, load_config
from wash.config import Config
from wash.domain.artifact.port import ArchiveCodec, ProviderArchive
from wash.domain.shared.error import ArtifactIOError

app = cyclopts.App(name="par", help="Inspect capability provider archives")


async def _load(config: Config, archive: Path) -> ProviderArchive:
    try:
        data = archive.read_bytes()
    except OSError as e:
        raise ArtifactIOError(f"Failed to read {archive}: {e}", path=str(archive)) from e

    container = create_container(config)
    try:
        codec = await container.get(ArchiveCodec)
        return codec.try_load(data)
    finally:
        await container.close()


@app.command
def inspect(archive: Path, /) -> None:
    """Inspect a provider archive and print the contents of its claims.

    Args:
        archive: Path to provider archive
    """
    with exit_on_error():
        config = load_config()
        par = asyncio.run(_load(config, archive))

    metadata = par.metadata
    rows = [
        {"field": "Capability Contract ID", "value": metadata.get("capid", "")},
        {"field": "Vendor", "value": metadata.get("vendor", "")},
        {"field": "Supported Architecture Targets", "value": "\n".join(par.targets)},
    ]
    get_console().table(
        rows,
        [("field", "Field"), ("value", "Value")],
        title=f"{metadata.get('name', archive.name)} - Provider Archive",
    )
