import re
from typing import ClassVar

from pydantic import field_validator

from wash.domain.shared.model.value import RootValueObject

SHA256_PREFIX = "sha256:"


def normalize_digest(digest: str) -> str:
    """Prefix a bare hex digest with ``sha256:``. Already-prefixed digests are returned unchanged."""
    if digest.startswith(SHA256_PREFIX):
        return digest
    return f"{SHA256_PREFIX}{digest}"


class Digest(RootValueObject[str]):
    """
    Content digest of the form ``sha256:<hex>``.
    A bare hex value is normalized by prefixing ``sha256:``.
    """

    _re: ClassVar[re.Pattern] = re.compile(r"^sha256:[0-9a-fA-F]+$")

    @field_validator("root", mode="before")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = normalize_digest(v.strip())
        if not cls._re.match(v):
            raise ValueError("invalid Digest (expected sha256:<hex>)")
        return v

    def __str__(self) -> str:
        return self.root
