"""Tests for digest normalization and verification."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from wash.domain.artifact.model import Digest, normalize_digest
from wash.domain.artifact.service import DigestVerifier
from wash.domain.shared.error import IntegrityMismatchError

HEX = "0f" * 32


class TestNormalizeDigest:
    def test_bare_hex_gets_prefix(self):
        assert normalize_digest(HEX) == f"sha256:{HEX}"

    def test_prefixed_digest_unchanged(self):
        assert normalize_digest(f"sha256:{HEX}") == f"sha256:{HEX}"

    @pytest.mark.parametrize("value", [HEX, f"sha256:{HEX}", "abc", ""])
    def test_idempotent(self, value):
        once = normalize_digest(value)
        assert normalize_digest(once) == once


class TestDigest:
    def test_accepts_bare_hex(self):
        assert str(Digest(HEX)) == f"sha256:{HEX}"

    def test_rejects_non_hex(self):
        with pytest.raises(PydanticValidationError):
            Digest("sha256:not-a-digest")


class TestDigestVerifier:
    @pytest.fixture
    def verifier(self):
        return DigestVerifier()

    def test_no_expected_digest_always_passes(self, verifier):
        verifier.verify(None, f"sha256:{HEX}")
        verifier.verify(None, None)

    def test_bare_expected_matches_prefixed_reported(self, verifier):
        verifier.verify(HEX, f"sha256:{HEX}")

    def test_prefixed_expected_matches(self, verifier):
        verifier.verify(f"sha256:{HEX}", f"sha256:{HEX}")

    def test_mismatch_raises(self, verifier):
        with pytest.raises(IntegrityMismatchError) as exc_info:
            verifier.verify("aa" * 32, f"sha256:{HEX}")

        assert exc_info.value.message == "Image digest did not match provided digest, aborting"
        assert exc_info.value.expected == "sha256:" + "aa" * 32
        assert exc_info.value.reported == f"sha256:{HEX}"

    def test_missing_reported_digest_is_a_mismatch(self, verifier):
        with pytest.raises(IntegrityMismatchError):
            verifier.verify(HEX, None)
