from __future__ import annotations

import re
from typing import Self

from wash.domain.shared.error import MalformedReferenceError
from wash.domain.shared.model.value import ValueObject

DEFAULT_REGISTRY = "docker.io"
DEFAULT_TAG = "latest"

_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*"
_REPOSITORY_RE = re.compile(rf"^{_COMPONENT}(?:/{_COMPONENT})*$")
_TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")
_DIGEST_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}$")
_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
_HOST_RE = re.compile(rf"^{_LABEL}(?:\.{_LABEL})*(?::[0-9]+)?$")

MAX_REPOSITORY_LENGTH = 255


class ArtifactReference(ValueObject):
    """
    Registry reference: {registry}/{repository}[:tag][@digest]
    Parsed once and immutable; `tag` stays None when the text carried no tag.
    """

    registry: str
    repository: str
    tag: str | None = None
    digest: str | None = None

    @property
    def resolved_tag(self) -> str:
        """The tag operations act on: the explicit tag, or "latest" when none was given."""
        return self.tag if self.tag is not None else DEFAULT_TAG

    @property
    def name(self) -> str:
        """Last path segment of the repository (e.g. "foo" for ns/foo)."""
        return self.repository.rsplit("/", 1)[-1]

    def whole(self) -> str:
        rendered = f"{self.registry}/{self.repository}"
        if self.tag is not None:
            rendered += f":{self.tag}"
        if self.digest is not None:
            rendered += f"@{self.digest}"
        return rendered

    def __str__(self) -> str:
        return self.whole()

    # ---------- parsing ----------

    @classmethod
    def parse(cls, reference: str) -> Self:
        """
        Parse [host[:port]/]path[:tag][@digest].
        The first path component is a host only if it looks like one
        (contains "." or ":", or is "localhost"); otherwise docker.io is assumed.
        Raises MalformedReferenceError before anything touches the network.
        """
        text = reference.strip()
        if not text:
            raise MalformedReferenceError(reference, "reference is empty")

        remainder, digest = text, None
        if "@" in remainder:
            remainder, digest = remainder.split("@", 1)
            if not _DIGEST_RE.match(digest):
                raise MalformedReferenceError(reference, f"invalid digest '{digest}'")

        tag = None
        if remainder.rfind(":") > remainder.rfind("/"):
            remainder, tag = remainder.rsplit(":", 1)
            if not _TAG_RE.match(tag):
                raise MalformedReferenceError(reference, f"invalid tag '{tag}'")

        first, sep, rest = remainder.partition("/")
        if sep and ("." in first or ":" in first or first == "localhost"):
            registry, repository = first, rest
            if not _HOST_RE.match(registry):
                raise MalformedReferenceError(reference, f"invalid registry host '{registry}'")
        else:
            registry, repository = DEFAULT_REGISTRY, remainder

        if registry == DEFAULT_REGISTRY and "/" not in repository:
            repository = f"library/{repository}"

        if not repository or not _REPOSITORY_RE.match(repository):
            raise MalformedReferenceError(reference, f"invalid repository name '{repository}'")
        if len(repository) > MAX_REPOSITORY_LENGTH:
            raise MalformedReferenceError(reference, "repository name is too long")

        return cls(registry=registry, repository=repository, tag=tag, digest=digest)
