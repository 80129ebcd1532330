from typing import Protocol


class Port(Protocol):
    """Marker base for capabilities the domain depends on abstractly."""
