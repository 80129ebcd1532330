"""Shared fixtures: synthetic actor modules and provider archives."""

import hashlib
import io
import os
import tarfile
from collections.abc import Callable
from typing import Any

import jwt
import pytest

SIGNING_KEY = "wash-test-signing-key-0123456789abcdef"

WASM_HEADER = b"\x00asm\x01\x00\x00\x00"
EMPTY_TYPE_SECTION = b"\x01\x01\x00"  # id=1, size=1, zero entries


def leb128(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def custom_section(name: str, contents: bytes) -> bytes:
    encoded = name.encode("utf-8")
    payload = leb128(len(encoded)) + encoded + contents
    return b"\x00" + leb128(len(payload)) + payload


def build_module(
    wascap: dict[str, Any] | None = None,
    *,
    body: bytes = EMPTY_TYPE_SECTION,
    with_claims: bool = True,
) -> bytes:
    """Build a minimal module, optionally signed with a ``jwt`` custom section."""
    base = WASM_HEADER + body
    if not with_claims:
        return base

    claims_wascap = {
        "name": "echo",
        "hash": hashlib.sha256(base).hexdigest().upper(),
        "caps": ["wasmcloud:httpserver"],
    }
    claims_wascap.update(wascap or {})
    token = jwt.encode(
        {
            "iss": "ACOJJN6WUP4ODD75XEBKKTCCUJJCY5ZKQ56XVKYK4BEJWGVAOOQHZMCW",
            "sub": "MBCFOPM6JW2APJLXJD3Z5O4CN7CPYJ2B4FTKLJUR5YR5MITIU7HD3WD5",
            "iat": 1600000000,
            "wascap": claims_wascap,
        },
        SIGNING_KEY,
        algorithm="HS256",
    )
    return base + custom_section("jwt", token.encode("utf-8"))


def build_archive(
    libraries: dict[str, bytes] | None = None,
    *,
    metadata: dict[str, Any] | None = None,
    compress: bool = True,
    include_claims: bool = True,
) -> bytes:
    """Build a provider archive holding claims.jwt plus one <target>.bin per library."""
    if libraries is None:
        libraries = {"x86_64-linux": b"\x7fELF provider", "aarch64-macos": b"\xcf\xfa provider"}

    wascap = {
        "name": "HTTP Server",
        "capid": "wasmcloud:httpserver",
        "vendor": "wasmcloud",
        "target_hashes": {
            target: hashlib.sha256(library).hexdigest().upper()
            for target, library in libraries.items()
        },
    }
    wascap.update(metadata or {})
    token = jwt.encode(
        {
            "iss": "ACOJJN6WUP4ODD75XEBKKTCCUJJCY5ZKQ56XVKYK4BEJWGVAOOQHZMCW",
            "sub": "VAHNM37G4ARHZ3CYHB3L34M6TYQWQR6IZ4QVYC4NYZWTJCJ2LWP7S6Z2",
            "iat": 1600000000,
            "wascap": wascap,
        },
        SIGNING_KEY,
        algorithm="HS256",
    )

    members: dict[str, bytes] = {}
    if include_claims:
        members["claims.jwt"] = token.encode("utf-8")
    for target, library in libraries.items():
        members[f"{target}.bin"] = library

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz" if compress else "w") as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def make_module() -> Callable[..., bytes]:
    return build_module


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    return build_archive


@pytest.fixture
def actor_module() -> bytes:
    return build_module()


@pytest.fixture
def provider_archive() -> bytes:
    return build_archive()


@pytest.fixture(autouse=True)
def _isolate_wash_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's WASH_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("WASH_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_section() -> Callable[[str, bytes], bytes]:
    return custom_section
