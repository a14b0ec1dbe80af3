"""Tests for remote model loading and the model lifecycle."""
from __future__ import annotations

import io

import pytest
import requests
import torch

from cancerscan.config import Settings
from cancerscan.services import models
from cancerscan.services.models import ModelHolder, ModelStatus

from conftest import StubModel


class MeanScore(torch.nn.Module):
    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return x.mean().reshape(1, 1)


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _scripted_bytes() -> bytes:
    buffer = io.BytesIO()
    torch.jit.save(torch.jit.script(MeanScore()), buffer)
    return buffer.getvalue()


def test_download_model_deserializes_torchscript(monkeypatch):
    payload = _scripted_bytes()
    seen = {}

    def fake_get(url, timeout):
        seen.update(url=url, timeout=timeout)
        return FakeResponse(payload)

    monkeypatch.setattr(models.requests, "get", fake_get)
    model = models.download_model("https://models.example/model.pt", timeout=12)
    assert seen == {"url": "https://models.example/model.pt", "timeout": 12}
    output = model(torch.ones(1, 224, 224, 3))
    assert output.item() == pytest.approx(1.0)


def test_download_model_propagates_http_errors(monkeypatch):
    monkeypatch.setattr(models.requests, "get", lambda url, timeout: FakeResponse(b"", 404))
    with pytest.raises(requests.HTTPError):
        models.download_model("https://models.example/missing.pt")


def test_download_model_rejects_malformed_artifact(monkeypatch):
    monkeypatch.setattr(models.requests, "get", lambda url, timeout: FakeResponse(b"{}"))
    with pytest.raises(RuntimeError):
        models.download_model("https://models.example/model.json")


def test_holder_starts_not_ready():
    holder = ModelHolder()
    assert holder.status is ModelStatus.UNINITIALIZED
    assert holder.describe() == {"status": "not ready", "message": "Model not loaded yet"}


def test_holder_becomes_ready_after_retry():
    attempts = []
    stub = StubModel(0.2)

    def loader():
        attempts.append(1)
        if len(attempts) == 1:
            raise requests.ConnectionError("timeout")
        return stub

    holder = ModelHolder()
    status = holder.load(loader, attempts=3, delay=5, sleep=lambda _: None)
    assert status is ModelStatus.READY
    assert holder.model is stub
    assert len(attempts) == 2
    assert holder.describe() == {
        "status": "ready",
        "message": "Model loaded and ready for predictions",
    }


def test_holder_unavailable_is_terminal():
    sleeps = []

    def loader():
        raise requests.ConnectionError("offline")

    holder = ModelHolder()
    assert holder.load(loader, attempts=3, delay=5, sleep=sleeps.append) is ModelStatus.UNAVAILABLE
    assert sleeps == [5, 5]
    assert holder.model is None
    assert holder.describe()["status"] == "not ready"

    # A second load request does not revive an unavailable holder.
    assert holder.load(lambda: StubModel(0.5), sleep=sleeps.append) is ModelStatus.UNAVAILABLE
    assert holder.model is None


def test_load_from_settings_uses_configured_source(monkeypatch):
    seen = []

    def fake_download(url, timeout):
        seen.append((url, timeout))
        return StubModel(0.1)

    monkeypatch.setattr(models, "download_model", fake_download)
    settings = Settings(artifact_url="https://models.example/x.pt", download_timeout=3.0)
    holder = ModelHolder()
    assert models.load_from_settings(holder, settings) is ModelStatus.READY
    assert seen == [("https://models.example/x.pt", 3.0)]
