from wash.domain.artifact.model import normalize_digest
from wash.domain.shared.error import IntegrityMismatchError
from wash.domain.shared.service import Service


class DigestVerifier(Service):
    """Compares a caller-supplied digest with the one the registry reported."""

    def verify(self, expected: str | None, reported: str | None) -> None:
        """
        Passes trivially when no digest is expected. Otherwise the expected
        digest is normalized to ``sha256:<hex>`` and must equal the reported
        digest exactly; a missing reported digest counts as a mismatch.

        Raises:
            IntegrityMismatchError: On mismatch
        """
        if expected is None:
            return
        normalized = normalize_digest(expected)
        if normalized != reported:
            raise IntegrityMismatchError(expected=normalized, reported=reported)
