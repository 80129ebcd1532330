"""Immutable pydantic bases for references, digests and claims."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Frozen model compared by its field values."""

    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Frozen single-value wrapper, e.g. a parsed digest string."""

    model_config = ConfigDict(frozen=True)
