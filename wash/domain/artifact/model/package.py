from wash.domain.shared.model.value import ValueObject


class ImageLayer(ValueObject):
    """One typed chunk of binary content within a registry package."""

    data: bytes
    media_type: str


class ImagePackage(ValueObject):
    """Layers plus the digest the registry reported for them (None before upload)."""

    layers: list[ImageLayer]
    digest: str | None = None

    def concatenated(self) -> bytes:
        """All layer payloads joined in order into one artifact buffer."""
        return b"".join(layer.data for layer in self.layers)
