"""Embedded capability claims in WebAssembly modules.

An actor module carries its signed claims as a JWT inside a custom section
named ``jwt``. The ``wascap.hash`` claim is the upper-case hex SHA-256 of the
module with that section removed, which binds the claims to the code.
"""

import hashlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from wash.domain.artifact.port import ClaimsExtractor, ClaimsToken
from wash.domain.shared.error import InvalidArtifactError

logger = logging.getLogger(__name__)

WASM_MAGIC = b"\x00asm"
WASM_VERSION = b"\x01\x00\x00\x00"
HEADER_SIZE = len(WASM_MAGIC) + len(WASM_VERSION)

CUSTOM_SECTION_ID = 0
CLAIMS_SECTION_NAME = "jwt"


class ActorMetadata(BaseModel):
    """Shape of the `wascap` claims object of an actor module."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    hash: str | None = None
    caps: list[str] | None = None


@dataclass(frozen=True)
class Section:
    """Location of one module section; start/end span the whole section including its header."""

    id: int
    start: int
    end: int
    payload_start: int


def read_leb128(data: bytes, offset: int) -> tuple[int, int]:
    """Decode an unsigned LEB128 integer. Returns (value, offset after it)."""
    result = 0
    shift = 0
    while True:
        if offset >= len(data):
            raise InvalidArtifactError("Truncated LEB128 integer in module")
        byte = data[offset]
        offset += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, offset
        shift += 7
        if shift > 35:
            raise InvalidArtifactError("LEB128 integer too long in module")


def iter_sections(module: bytes) -> Iterator[Section]:
    if len(module) < HEADER_SIZE or module[:4] != WASM_MAGIC:
        raise InvalidArtifactError("Not a WebAssembly module (bad magic number)")
    if module[4:HEADER_SIZE] != WASM_VERSION:
        raise InvalidArtifactError("Unsupported WebAssembly version")

    offset = HEADER_SIZE
    while offset < len(module):
        start = offset
        section_id = module[offset]
        size, payload_start = read_leb128(module, offset + 1)
        end = payload_start + size
        if end > len(module):
            raise InvalidArtifactError("Section extends past end of module")
        yield Section(id=section_id, start=start, end=end, payload_start=payload_start)
        offset = end


def custom_section_name(module: bytes, section: Section) -> tuple[str, int]:
    """Returns (name, offset where the section contents begin)."""
    length, name_start = read_leb128(module, section.payload_start)
    name_end = name_start + length
    if name_end > section.end:
        raise InvalidArtifactError("Custom section name extends past section")
    try:
        name = module[name_start:name_end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidArtifactError("Custom section name is not valid UTF-8") from e
    return name, name_end


def module_hash(module: bytes, without: list[Section]) -> str:
    """Upper-case hex SHA-256 of the module with the given sections cut out."""
    hasher = hashlib.sha256()
    cursor = 0
    for section in without:
        hasher.update(module[cursor : section.start])
        cursor = section.end
    hasher.update(module[cursor:])
    return hasher.hexdigest().upper()


class WascapClaimsExtractor(ClaimsExtractor):
    """Finds, decodes and hash-checks the claims JWT of an actor module.

    Signatures are not verified here; key management lives elsewhere.
    """

    def extract_claims(self, module: bytes) -> ClaimsToken | None:
        token: str | None = None
        claim_sections: list[Section] = []

        for section in iter_sections(module):
            if section.id != CUSTOM_SECTION_ID:
                continue
            name, contents_start = custom_section_name(module, section)
            if name != CLAIMS_SECTION_NAME:
                continue
            claim_sections.append(section)
            if token is None:
                try:
                    token = module[contents_start : section.end].decode("utf-8")
                except UnicodeDecodeError as e:
                    raise InvalidArtifactError("Claims section is not valid UTF-8") from e

        if token is None:
            return None

        claims = self._decode(token)
        wascap = claims.get("wascap")
        if not isinstance(wascap, dict):
            raise InvalidArtifactError("Token does not contain wascap claims")
        try:
            metadata = ActorMetadata.model_validate(wascap)
        except ValidationError as e:
            raise InvalidArtifactError(f"Malformed wascap claims: {e}") from e

        actual_hash = module_hash(module, claim_sections)
        if metadata.hash is not None and metadata.hash.upper() != actual_hash:
            raise InvalidArtifactError(
                "Module hash does not match the hash recorded in its claims"
            )

        logger.debug("Extracted claims for subject %s", claims.get("sub"))
        return ClaimsToken(
            jwt=token,
            issuer=str(claims.get("iss", "")),
            subject=str(claims.get("sub", "")),
            name=metadata.name,
            module_hash=actual_hash,
            capabilities=metadata.caps or [],
            metadata=wascap,
        )

    def _decode(self, token: str) -> dict:
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise InvalidArtifactError(f"Invalid claims token: {e}") from e
        if not isinstance(claims, dict):
            raise InvalidArtifactError("Claims token payload is not an object")
        return claims
