"""Tests for ArtifactReference parsing."""

import pytest

from wash.domain.artifact.model import ArtifactReference
from wash.domain.shared.error import MalformedReferenceError, ValidationError

DIGEST = "sha256:" + "ab" * 32


class TestArtifactReferenceParse:
    def test_explicit_registry_with_port(self):
        ref = ArtifactReference.parse("localhost:5000/echo:0.2.0")

        assert ref.registry == "localhost:5000"
        assert ref.repository == "echo"
        assert ref.tag == "0.2.0"
        assert ref.digest is None

    def test_port_is_not_mistaken_for_tag(self):
        ref = ArtifactReference.parse("localhost:5000/echo")

        assert ref.registry == "localhost:5000"
        assert ref.tag is None
        assert ref.resolved_tag == "latest"

    def test_dotted_host_is_registry(self):
        ref = ArtifactReference.parse("wasmcloud.azurecr.io/wasmcloud/echo:0.2.0")

        assert ref.registry == "wasmcloud.azurecr.io"
        assert ref.repository == "wasmcloud/echo"
        assert ref.name == "echo"

    def test_single_component_defaults_to_docker_library(self):
        ref = ArtifactReference.parse("echo:1.0")

        assert ref.registry == "docker.io"
        assert ref.repository == "library/echo"

    def test_namespace_without_host_defaults_to_docker(self):
        ref = ArtifactReference.parse("wasmcloud/echo")

        assert ref.registry == "docker.io"
        assert ref.repository == "wasmcloud/echo"
        assert ref.tag is None

    def test_digest_is_kept(self):
        ref = ArtifactReference.parse(f"localhost:5000/echo@{DIGEST}")

        assert ref.digest == DIGEST
        assert ref.tag is None

    def test_tag_and_digest(self):
        ref = ArtifactReference.parse(f"localhost:5000/echo:0.1.0@{DIGEST}")

        assert ref.tag == "0.1.0"
        assert ref.digest == DIGEST

    def test_whole_renders_canonical_form(self):
        ref = ArtifactReference.parse("localhost:5000/ns/echo:0.2.0")

        assert ref.whole() == "localhost:5000/ns/echo:0.2.0"
        assert str(ref) == ref.whole()

    def test_whole_omits_missing_tag(self):
        ref = ArtifactReference.parse("localhost:5000/echo")

        assert ref.whole() == "localhost:5000/echo"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "localhost:5000/Echo:1.0",
            "localhost:5000/echo:bad tag",
            "localhost:5000/echo@sha256:nothex",
            "localhost:5000/",
            "localhost:5000//echo",
        ],
    )
    def test_malformed_references_are_rejected(self, text):
        with pytest.raises(MalformedReferenceError):
            ArtifactReference.parse(text)

    def test_malformed_reference_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            ArtifactReference.parse("localhost:5000/Echo")

        assert exc_info.value.field == "reference"
        assert "localhost:5000/Echo" in exc_info.value.message

    def test_reference_is_immutable(self):
        ref = ArtifactReference.parse("localhost:5000/echo:0.2.0")

        with pytest.raises(Exception):
            ref.tag = "other"  # type: ignore[misc]
