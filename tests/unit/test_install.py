"""Tests for the QuickJS-ng installer."""

import stat
import sys

import httpx
import pytest

from morphql.install import install_qjs, main

pytestmark = pytest.mark.unit

BINARY = b"\x7fELF" + b"\0" * 4096


def release_handler(request: httpx.Request) -> httpx.Response:
    name = request.url.path.rsplit("/", 1)[-1]
    if name == "qjs-linux-x86_64":
        return httpx.Response(200, content=BINARY)
    if name == "qjs-darwin":
        return httpx.Response(200, content=b"Not Found")
    return httpx.Response(404)


@pytest.fixture
def client():
    with httpx.Client(transport=httpx.MockTransport(release_handler)) as client:
        yield client


def test_install_reports_each_binary(tmp_path, client):
    results = install_qjs(tmp_path, client=client)

    assert results == {
        "qjs-linux-x86_64": True,
        "qjs-darwin": False,
        "qjs-windows-x86_64.exe": False,
    }
    assert (tmp_path / "qjs-linux-x86_64").read_bytes() == BINARY
    assert not (tmp_path / "qjs-darwin").exists()


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_installed_binary_is_executable(tmp_path, client):
    install_qjs(tmp_path, client=client)

    mode = (tmp_path / "qjs-linux-x86_64").stat().st_mode
    assert mode & stat.S_IXUSR


def test_release_url_uses_version(tmp_path):
    seen: list[str] = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(404)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        install_qjs(tmp_path, version="v9.9.9", client=client)

    assert seen[0] == (
        "https://github.com/quickjs-ng/quickjs/releases/download/v9.9.9/qjs-linux-x86_64"
    )


def test_bundle_is_copied(tmp_path, client):
    bundle = tmp_path / "dist" / "qjs.js"
    bundle.parent.mkdir()
    bundle.write_text("// bundle")
    bin_dir = tmp_path / "bin"

    results = install_qjs(bin_dir, client=client, bundle_source=bundle)

    assert results["qjs.js"] is True
    assert (bin_dir / "qjs.js").read_text() == "// bundle"


def test_missing_bundle_is_reported(tmp_path, client):
    results = install_qjs(tmp_path, client=client, bundle_source=tmp_path / "nope.js")

    assert results["qjs.js"] is False


def test_main_exit_code_reflects_failures(tmp_path, monkeypatch, capsys):
    def fake_install(bin_dir, *, version, bundle_source):
        return {"qjs-linux-x86_64": True, "qjs-darwin": False}

    monkeypatch.setattr("morphql.install.install_qjs", fake_install)

    assert main(["--bin-dir", str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "qjs-darwin: FAILED" in out
    assert "Installation complete." in out
