from wash.infrastructure.oci.di import OciProvider
from wash.infrastructure.oci.memory import InMemoryRegistryTransport
from wash.infrastructure.oci.transport import OrasRegistryTransport

__all__ = ["InMemoryRegistryTransport", "OciProvider", "OrasRegistryTransport"]
