"""wash - distribute WebAssembly actors and capability provider archives through OCI registries."""

__version__ = "0.1.0"
