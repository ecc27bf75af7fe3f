import json
from dataclasses import dataclass

import pytest

from review_proof.utils import Config


@dataclass
class FakeResponse:
    status_code: int = 200
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400  # same rule as requests.Response.ok


class PostRecorder:
    """Stands in for requests.post; returns a canned response or raises."""

    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse(200, json.dumps({"status": "success"}))
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def cfg() -> Config:
    return Config(url="https://script.example.com/exec", timeout=5)


@pytest.fixture
def image(tmp_path):
    p = tmp_path / "proof.png"
    p.write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)))
    return p


@pytest.fixture
def fake_post(monkeypatch):
    def install(response=None, exc=None) -> PostRecorder:
        recorder = PostRecorder(response, exc)
        monkeypatch.setattr("review_proof.client.requests.post", recorder)
        return recorder

    return install
