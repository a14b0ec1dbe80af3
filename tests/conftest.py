"""Shared fixtures: stub model, in-memory Firestore and test images."""
from __future__ import annotations

import io

import pytest
import torch
from PIL import Image

from cancerscan.services.recorder import PredictionRecorder


class StubModel:
    """Callable standing in for the TorchScript classifier."""

    def __init__(self, score: float) -> None:
        self.score = score
        self.shapes: list[tuple[int, ...]] = []

    def __call__(self, tensor: torch.Tensor) -> torch.Tensor:
        self.shapes.append(tuple(tensor.shape))
        return torch.tensor([[self.score]])


class FakeDocument:
    def __init__(self, store: dict, key: tuple[str, str], error: Exception | None) -> None:
        self._store = store
        self._key = key
        self._error = error

    def set(self, data: dict) -> None:
        if self._error is not None:
            raise self._error
        self._store[self._key] = dict(data)


class FakeCollection:
    def __init__(self, client: "FakeFirestore", name: str) -> None:
        self._client = client
        self._name = name

    def document(self, doc_id: str) -> FakeDocument:
        return FakeDocument(self._client.documents, (self._name, doc_id), self._client.error)


class FakeFirestore:
    def __init__(self, error: Exception | None = None) -> None:
        self.documents: dict[tuple[str, str], dict] = {}
        self.error = error

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)


def make_image_bytes(color=(120, 60, 200), size=(64, 48), fmt="PNG", mode="RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color=color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def firestore_client() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def recorder(firestore_client: FakeFirestore) -> PredictionRecorder:
    return PredictionRecorder(lambda: firestore_client, "predictions")
