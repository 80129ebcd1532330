"""Error hierarchy for wash.

Error layers:
- WashError: Base class for all wash errors
- DomainError: Rule violations and rejected input (bad references, policy, integrity, unknown artifacts)
- InfrastructureError: System-level failures like registry transport or file I/O

Every error is terminal for a CLI invocation: the CLI prints the message and exits 1.
"""


class WashError(Exception):
    """Base class for all wash errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(WashError):
    """Base class for domain errors."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class MalformedReferenceError(ValidationError):
    """Artifact reference could not be parsed into host/repository/tag."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"Invalid artifact reference '{reference}': {reason}", field="reference")
        self.reference = reference


class PolicyViolationError(DomainError):
    """Operation against a mutable tag without an explicit override."""


class IntegrityMismatchError(DomainError):
    """Registry-reported digest does not match the expected digest."""

    def __init__(self, expected: str, reported: str | None) -> None:
        super().__init__("Image digest did not match provided digest, aborting")
        self.expected = expected
        self.reported = reported


class InvalidArtifactError(DomainError):
    """Bytes are not a valid artifact of the kind being checked."""


class UnsupportedArtifactError(DomainError):
    """Bytes matched none of the known artifact kinds."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Unsupported artifact type: {label}")
        self.label = label


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(WashError):
    """Base class for infrastructure/system errors."""


class TransportError(InfrastructureError):
    """Registry could not be reached or rejected the request."""


class AuthenticationError(TransportError):
    """Registry rejected the supplied credentials."""


class ArtifactIOError(InfrastructureError):
    """Reading or writing a local artifact/config file failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
