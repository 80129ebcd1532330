"""Registry transport backed by the ORAS client.

The distribution protocol itself (token auth, manifest negotiation, blob
transfer) is left to oras; this adapter maps between ImagePackage and the
manifest/blob calls and translates failures into wash errors.
"""

import asyncio
import hashlib
import logging
import tempfile
from pathlib import Path
from typing import Any

import requests
from oras.client import OrasClient

from wash.domain.artifact.model import (
    ArtifactReference,
    BasicAuth,
    Credentials,
    Digest,
    ImageLayer,
    ImagePackage,
)
from wash.domain.artifact.port import RegistryTransport
from wash.domain.shared.error import AuthenticationError, TransportError

logger = logging.getLogger(__name__)

MANIFEST_MEDIA_TYPES = [
    "application/vnd.oci.image.manifest.v1+json",
    "application/vnd.docker.distribution.manifest.v2+json",
]
DIGEST_HEADER = "Docker-Content-Digest"


AUTH_FAILURE_STATUSES = (401, 403)


def _is_auth_failure(error: Exception) -> bool:
    """True when the registry answered with 401/403; network failures carry no response."""
    response = getattr(error, "response", None)
    return response is not None and response.status_code in AUTH_FAILURE_STATUSES


class OrasRegistryTransport(RegistryTransport):
    """Pulls and pushes single-artifact packages through oras.

    oras is synchronous; each call runs in a worker thread so the
    workflow awaits exactly one blocking operation per transfer.
    """

    def __init__(self, insecure: bool = False, tls_verify: bool = True):
        self._insecure = insecure
        self._tls_verify = tls_verify

    async def pull(
        self,
        reference: ArtifactReference,
        credentials: Credentials,
        accepted_media_types: list[str],
    ) -> ImagePackage:
        return await asyncio.to_thread(
            self._pull, reference, credentials, accepted_media_types
        )

    async def push(
        self,
        reference: ArtifactReference,
        package: ImagePackage,
        config: bytes,
        config_media_type: str,
        credentials: Credentials,
    ) -> str | None:
        return await asyncio.to_thread(
            self._push, reference, package, config, config_media_type, credentials
        )

    # -------------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------------

    def _client(self, reference: ArtifactReference, credentials: Credentials) -> OrasClient:
        client = OrasClient(insecure=self._insecure, tls_verify=self._tls_verify)
        if isinstance(credentials, BasicAuth):
            try:
                client.login(
                    hostname=reference.registry,
                    username=credentials.username,
                    password=credentials.password.get_secret_value(),
                    tls_verify=self._tls_verify,
                )
            except (requests.RequestException, ValueError) as e:
                raise AuthenticationError(
                    f"Failed to authenticate with {reference.registry}: {e}"
                ) from e
        return client

    # -------------------------------------------------------------------------
    # Pull
    # -------------------------------------------------------------------------

    def _pull(
        self,
        reference: ArtifactReference,
        credentials: Credentials,
        accepted_media_types: list[str],
    ) -> ImagePackage:
        client = self._client(reference, credentials)
        container = client.get_container(reference.whole())

        try:
            manifest, digest = self._fetch_manifest(client, container)
            layers = []
            for descriptor in manifest.get("layers", []):
                media_type = descriptor.get("mediaType", "")
                if media_type not in accepted_media_types:
                    raise TransportError(
                        f"Incompatible layer media type {media_type!r} in {reference.whole()}"
                    )
                blob = client.get_blob(container, descriptor["digest"])
                blob.raise_for_status()
                layers.append(ImageLayer(data=blob.content, media_type=media_type))
        except (requests.RequestException, ValueError, KeyError) as e:
            if _is_auth_failure(e):
                raise AuthenticationError(f"Registry denied access to {reference.whole()}") from e
            raise TransportError(f"Failed to pull {reference.whole()}: {e}") from e

        logger.debug("Pulled %d layer(s) from %s", len(layers), reference.whole())
        return ImagePackage(layers=layers, digest=digest)

    def _fetch_manifest(self, client: OrasClient, container: Any) -> tuple[dict, str]:
        """Fetch the manifest and the digest the registry reports for it."""
        url = f"{client.prefix}://{container.manifest_url()}"
        response = client.do_request(
            url, "GET", headers={"Accept": ", ".join(MANIFEST_MEDIA_TYPES)}
        )
        response.raise_for_status()
        digest = response.headers.get(DIGEST_HEADER) or str(
            Digest(hashlib.sha256(response.content).hexdigest())
        )
        return response.json(), digest

    # -------------------------------------------------------------------------
    # Push
    # -------------------------------------------------------------------------

    def _push(
        self,
        reference: ArtifactReference,
        package: ImagePackage,
        config: bytes,
        config_media_type: str,
        credentials: Credentials,
    ) -> str | None:
        client = self._client(reference, credentials)

        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)

            files = []
            for index, layer in enumerate(package.layers):
                layer_file = tmpdir_path / f"{reference.name}-{index}"
                layer_file.write_bytes(layer.data)
                files.append(f"{layer_file}:{layer.media_type}")

            config_file = tmpdir_path / "config.json"
            config_file.write_bytes(config)

            try:
                response = client.push(
                    target=reference.whole(),
                    files=files,
                    manifest_config=f"{config_file}:{config_media_type}",
                    disable_path_validation=True,
                )
            except (requests.RequestException, ValueError) as e:
                if _is_auth_failure(e):
                    raise AuthenticationError(
                        f"Registry denied push to {reference.whole()}"
                    ) from e
                raise TransportError(f"Failed to push {reference.whole()}: {e}") from e

        if not response.ok:
            if response.status_code in AUTH_FAILURE_STATUSES:
                raise AuthenticationError(f"Registry denied push to {reference.whole()}")
            raise TransportError(
                f"Push failed: {response.status_code}: {response.text}"
            )

        digest = response.headers.get(DIGEST_HEADER)
        logger.debug("Pushed %s (digest %s)", reference.whole(), digest)
        return digest
