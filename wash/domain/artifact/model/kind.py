from enum import Enum

WASM_MEDIA_TYPE = "application/vnd.module.wasm.content.layer.v1+wasm"
WASM_CONFIG_MEDIA_TYPE = "application/vnd.wascc.actor.archive.config"
WASM_FILE_EXTENSION = ".wasm"

PROVIDER_ARCHIVE_MEDIA_TYPE = "application/vnd.wascc.provider.archive.layer.v1+par"
PROVIDER_ARCHIVE_CONFIG_MEDIA_TYPE = "application/vnd.wascc.provider.archive.config"
PROVIDER_ARCHIVE_FILE_EXTENSION = ".par.gz"


class ArtifactKind(str, Enum):
    """Closed set of artifact kinds the registry workflows understand."""

    WASM_MODULE = "wasm"
    PROVIDER_ARCHIVE = "par"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self][0]

    @property
    def config_media_type(self) -> str:
        return _MEDIA_TYPES[self][1]

    @property
    def extension(self) -> str:
        return _MEDIA_TYPES[self][2]


# kind -> (layer media type, config media type, output file extension)
_MEDIA_TYPES: dict[ArtifactKind, tuple[str, str, str]] = {
    ArtifactKind.WASM_MODULE: (WASM_MEDIA_TYPE, WASM_CONFIG_MEDIA_TYPE, WASM_FILE_EXTENSION),
    ArtifactKind.PROVIDER_ARCHIVE: (
        PROVIDER_ARCHIVE_MEDIA_TYPE,
        PROVIDER_ARCHIVE_CONFIG_MEDIA_TYPE,
        PROVIDER_ARCHIVE_FILE_EXTENSION,
    ),
}

ACCEPTED_MEDIA_TYPES: list[str] = [PROVIDER_ARCHIVE_MEDIA_TYPE, WASM_MEDIA_TYPE]
