"""Tests for model downloads."""

import threading

import httpx
import pytest

from doctalk.config import GenerationConfig, ModelsConfig
from doctalk.core import DownloadCancelledError
from doctalk.models import ModelStore, download_file, hf_resolve_url

PAYLOAD = b"GGUF" + b"\x00" * 4096


def make_client(status=200, body=PAYLOAD):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/moved"):
            return httpx.Response(302, headers={"location": "https://cdn.example.com/blob"})
        return httpx.Response(status, content=body, headers={"content-length": str(len(body))})

    return httpx.Client(transport=httpx.MockTransport(handler)), requests


class TestHfResolveUrl:
    def test_builds_resolve_url(self):
        url = hf_resolve_url("TheBloke/Llama-2-7B-Chat-GGUF", "llama-2-7b-chat.Q4_K_M.gguf")

        assert url == (
            "https://huggingface.co/TheBloke/Llama-2-7B-Chat-GGUF"
            "/resolve/main/llama-2-7b-chat.Q4_K_M.gguf"
        )

    def test_custom_hub(self):
        assert hf_resolve_url("/o/m/", "f.bin", hub_url="http://mirror/") == "http://mirror/o/m/resolve/main/f.bin"


class TestDownloadFile:
    def test_writes_destination_and_creates_directory(self, tmp_path):
        client, _ = make_client()
        destination = tmp_path / "model" / "m.gguf"

        result = download_file("https://hub/o/m/resolve/main/m.gguf", destination, client=client, chunk_size=1024)

        assert result == destination
        assert destination.read_bytes() == PAYLOAD
        assert not (tmp_path / "model" / "m.gguf.part").exists()

    def test_follows_redirects(self, tmp_path):
        client, requests = make_client()

        download_file("https://hub/moved", tmp_path / "m.gguf", client=client)

        assert [str(r.url) for r in requests] == ["https://hub/moved", "https://cdn.example.com/blob"]
        assert (tmp_path / "m.gguf").read_bytes() == PAYLOAD

    def test_http_error_propagates(self, tmp_path):
        client, _ = make_client(status=404, body=b"missing")

        with pytest.raises(httpx.HTTPStatusError):
            download_file("https://hub/x", tmp_path / "m.gguf", client=client)

        assert list(tmp_path.iterdir()) == []

    def test_cancel_removes_partial_file(self, tmp_path):
        client, _ = make_client()
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(DownloadCancelledError, match="https://hub/x"):
            download_file("https://hub/x", tmp_path / "m.gguf", client=client, cancel_event=cancel)

        assert list(tmp_path.iterdir()) == []

    def test_caller_client_left_open(self, tmp_path):
        client, _ = make_client()

        download_file("https://hub/x", tmp_path / "m.gguf", client=client)

        assert not client.is_closed


class TestModelStore:
    @pytest.fixture
    def store_factory(self, tmp_path):
        def make(client):
            return ModelStore(
                ModelsConfig(model_dir=str(tmp_path / "model"), hub_url="https://hub"),
                GenerationConfig(model_repo="o/m", model_file="m.gguf"),
                client=client,
            )
        return make

    def test_paths(self, store_factory, tmp_path):
        store = store_factory(None)

        assert store.llm_path == tmp_path / "model" / "m.gguf"
        assert store.llm_url == "https://hub/o/m/resolve/main/m.gguf"

    def test_downloads_once(self, store_factory):
        client, requests = make_client()
        store = store_factory(client)

        first = store.ensure_llm()
        second = store.ensure_llm()

        assert first == second == store.llm_path
        assert first.read_bytes() == PAYLOAD
        assert len(requests) == 1
