"""Provider archive (.par / .par.gz) container format.

A provider archive is a tar stream, optionally gzip-compressed, holding a
``claims.jwt`` file and one ``<arch>-<os>.bin`` library per supported target.
"""

import hashlib
import io
import logging
import tarfile
import zlib
from pathlib import PurePosixPath

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from wash.domain.artifact.port import ArchiveCodec, ProviderArchive
from wash.domain.shared.error import InvalidArtifactError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
CLAIMS_FILE = "claims.jwt"
LIBRARY_SUFFIX = ".bin"


class ProviderMetadata(BaseModel):
    """Shape of the `wascap` claims object of a provider archive."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    capid: str | None = None
    vendor: str | None = None
    target_hashes: dict[str, str] | None = None


def library_hash(library: bytes) -> str:
    return hashlib.sha256(library).hexdigest().upper()


class TarArchiveCodec(ArchiveCodec):
    """Loads provider archives with the standard tarfile module."""

    def try_load(self, data: bytes) -> ProviderArchive:
        token, libraries = self._read_members(data)

        if token is None:
            raise InvalidArtifactError(f"Provider archive has no {CLAIMS_FILE}")

        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise InvalidArtifactError(f"Invalid provider archive claims: {e}") from e

        metadata = self._metadata(claims)
        archive = ProviderArchive(claims_jwt=token, claims=claims, libraries=libraries)
        self._verify_hashes(archive, metadata.target_hashes or {})

        logger.debug("Loaded provider archive with targets %s", archive.targets)
        return archive

    def _read_members(self, data: bytes) -> tuple[str | None, dict[str, bytes]]:
        mode = "r:gz" if data[:2] == GZIP_MAGIC else "r:"
        token: str | None = None
        libraries: dict[str, bytes] = {}

        try:
            with tarfile.open(fileobj=io.BytesIO(data), mode=mode) as tar:
                for member in tar:
                    if not member.isfile():
                        continue
                    path = PurePosixPath(member.name)
                    if path.name != CLAIMS_FILE and path.suffix != LIBRARY_SUFFIX:
                        continue
                    extracted = tar.extractfile(member)
                    if extracted is None:
                        continue
                    contents = extracted.read()
                    if path.name == CLAIMS_FILE:
                        token = contents.decode("utf-8").strip()
                    else:
                        libraries[path.stem] = contents
        except (tarfile.TarError, OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
            raise InvalidArtifactError(f"Not a provider archive: {e}") from e

        return token, libraries

    def _metadata(self, claims: dict) -> ProviderMetadata:
        wascap = claims.get("wascap", {})
        if not isinstance(wascap, dict):
            raise InvalidArtifactError("Provider archive claims carry a non-object wascap claim")
        try:
            return ProviderMetadata.model_validate(wascap)
        except ValidationError as e:
            raise InvalidArtifactError(f"Malformed provider archive claims: {e}") from e

    def _verify_hashes(self, archive: ProviderArchive, target_hashes: dict[str, str]) -> None:
        for target, library in archive.libraries.items():
            expected = target_hashes.get(target)
            if expected is None:
                continue
            if expected.upper() != library_hash(library):
                raise InvalidArtifactError(
                    f"Library for target {target} does not match the hash in the archive claims"
                )
