"""Tests for the asset download script."""

import importlib.util
from pathlib import Path

import httpx
import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "download_assets.py"


@pytest.fixture(scope="module")
def download_assets():
    spec = importlib.util.spec_from_file_location("download_assets", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_download_writes_destination(download_assets, tmp_path: Path) -> None:
    dest = tmp_path / "models" / "vocab.txt"
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=b"[PAD]\n")))

    download_assets.download("https://assets.test/vocab.txt", dest, client=client)

    assert dest.read_bytes() == b"[PAD]\n"
    assert not (tmp_path / "models" / "vocab.txt.part").exists()


def test_interrupted_stream_removes_partial_file(download_assets, tmp_path: Path) -> None:
    def body():
        yield b"first chunk"
        raise httpx.ReadError("connection dropped")

    dest = tmp_path / "encoder.onnx"
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=body())))

    with pytest.raises(httpx.ReadError):
        download_assets.download("https://assets.test/encoder.onnx", dest, client=client)

    assert not dest.exists()
    assert not (tmp_path / "encoder.onnx.part").exists()


def test_http_error_leaves_no_files(download_assets, tmp_path: Path) -> None:
    dest = tmp_path / "encoder.onnx"
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))

    with pytest.raises(httpx.HTTPStatusError):
        download_assets.download("https://assets.test/encoder.onnx", dest, client=client)

    assert list(tmp_path.iterdir()) == []
