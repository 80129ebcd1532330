from typing import Literal

from wash.domain.artifact.model import ArtifactReference
from wash.domain.artifact.model.reference import DEFAULT_TAG
from wash.domain.shared.error import PolicyViolationError
from wash.domain.shared.service import Service

Operation = Literal["pull", "push"]

_VERBS: dict[str, str] = {"pull": "Pulling", "push": "Pushing"}


class ReferencePolicyGuard(Service):
    """Rejects operations against the floating "latest" tag unless overridden."""

    def check_mutability_policy(
        self,
        reference: ArtifactReference,
        allow_latest: bool,
        operation: Operation = "pull",
    ) -> None:
        """
        Raises:
            PolicyViolationError: If the resolved tag is "latest" and allow_latest is not set
        """
        if reference.resolved_tag == DEFAULT_TAG and not allow_latest:
            raise PolicyViolationError(
                f"{_VERBS[operation]} artifacts with tag '{DEFAULT_TAG}' is prohibited. "
                "This can be overriden with a flag"
            )
