"""Tests for the `wash reg` and `wash par` commands."""

from pathlib import Path

import pytest

from wash.cli.main import app
from wash.domain.artifact.model import ArtifactKind, ImageLayer, ImagePackage
from wash.infrastructure.oci import InMemoryRegistryTransport
from wash.infrastructure.oci.memory import StoredArtifact

DIGEST = "sha256:" + "5e" * 32


def _invoke(args: list[str]) -> int:
    try:
        app(args)
    except SystemExit as e:
        return e.code or 0
    return 0


@pytest.fixture(autouse=True)
def _quiet_bootstrap(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring global logging during tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("wash.cli.util.settings.configure_logging", lambda config: None)
    monkeypatch.setattr("wash.cli.util.settings.logfire.configure", lambda **kwargs: None)


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> InMemoryRegistryTransport:
    transport = InMemoryRegistryTransport()
    monkeypatch.setattr(
        "wash.infrastructure.oci.di.OrasRegistryTransport", lambda **kwargs: transport
    )
    return transport


class TestRegPull:
    def test_pulls_to_output(self, registry, actor_module, tmp_path: Path, capsys):
        registry.artifacts["localhost:5000/echo:0.2.0"] = StoredArtifact(
            package=ImagePackage(
                layers=[ImageLayer(data=actor_module, media_type=ArtifactKind.WASM_MODULE.media_type)],
                digest=DIGEST,
            ),
            config=b"{}",
            config_media_type=ArtifactKind.WASM_MODULE.config_media_type,
        )
        output = tmp_path / "echo.wasm"

        code = _invoke(["reg", "pull", "localhost:5000/echo:0.2.0", "-o", str(output), "-d", DIGEST])

        assert code == 0
        assert output.read_bytes() == actor_module
        assert "Successfully pulled and validated" in capsys.readouterr().out

    def test_latest_is_refused(self, registry, capsys):
        code = _invoke(["reg", "pull", "localhost:5000/echo"])

        captured = capsys.readouterr()
        assert code == 1
        assert captured.err.strip() == (
            "Error: Pulling artifacts with tag 'latest' is prohibited. "
            "This can be overriden with a flag"
        )
        assert registry.calls == []

    def test_transport_failure_exits_1(self, registry, capsys):
        code = _invoke(["reg", "pull", "localhost:5000/missing:1.0", "--allow-latest"])

        assert code == 1
        assert capsys.readouterr().err.startswith("Error: manifest unknown")


class TestRegPush:
    def test_push_reports_digest(self, registry, actor_module, tmp_path: Path, capsys):
        artifact = tmp_path / "echo_s.wasm"
        artifact.write_bytes(actor_module)

        code = _invoke(["reg", "push", "localhost:5000/echo:0.2.0", str(artifact)])

        assert code == 0
        out = capsys.readouterr().out
        assert "Successfully validated and pushed" in out
        assert "sha256:" in out
        assert "localhost:5000/echo:0.2.0" in registry.artifacts

    def test_unsupported_artifact(self, registry, tmp_path: Path, capsys):
        artifact = tmp_path / "notes.txt"
        artifact.write_text("hello")

        code = _invoke(["reg", "push", "localhost:5000/notes:1.0", str(artifact)])

        assert code == 1
        assert f"Error: Unsupported artifact type: {artifact}" in capsys.readouterr().err
        assert registry.calls == []


class TestParInspect:
    def test_prints_claims(self, provider_archive, tmp_path: Path, capsys):
        archive = tmp_path / "httpserver.par.gz"
        archive.write_bytes(provider_archive)

        code = _invoke(["par", "inspect", str(archive)])

        out = capsys.readouterr().out
        assert code == 0
        assert "HTTP Server - Provider Archive" in out
        assert "wasmcloud:httpserver" in out
        assert "x86_64-linux" in out

    def test_missing_archive(self, tmp_path: Path, capsys):
        code = _invoke(["par", "inspect", str(tmp_path / "missing.par.gz")])

        assert code == 1
        assert "Error: Failed to read" in capsys.readouterr().err
