"""Base for artifact domain services such as the classifier and the pull/push flows."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(type):
    """Turns every concrete service into a dataclass so its ports can be injected by field."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(cls)
        return cls


class Service(metaclass=_ServiceMeta):
    """A wash domain service; declare its ports as annotated fields."""
