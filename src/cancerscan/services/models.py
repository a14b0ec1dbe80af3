"""Remote model loading and process-wide model state."""
from __future__ import annotations

import enum
import io
import time
from typing import Callable, Optional

import requests
import torch

from ..utils.logger import get_logger
from ..utils.retry import RetryError, retry_with_delay

logger = get_logger(__name__)

ModelLoader = Callable[[], Callable[[torch.Tensor], torch.Tensor]]


class ModelStatus(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


def download_model(url: str, timeout: float = 60.0) -> torch.jit.ScriptModule:
    """Fetch a TorchScript artifact over HTTP and deserialize it on the CPU."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    model = torch.jit.load(io.BytesIO(response.content), map_location="cpu")
    model.eval()
    return model


class ModelHolder:
    """Holds the single model reference for the lifetime of the process.

    The reference is written at most once by :meth:`load`. ``UNAVAILABLE`` is
    terminal: a holder whose load gave up never tries again.
    """

    def __init__(self, model: Optional[Callable[[torch.Tensor], torch.Tensor]] = None) -> None:
        self._model = model
        self._status = ModelStatus.READY if model is not None else ModelStatus.UNINITIALIZED

    @property
    def model(self):
        return self._model

    @property
    def status(self) -> ModelStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is ModelStatus.READY

    def load(
        self,
        loader: ModelLoader,
        *,
        attempts: int = 3,
        delay: float = 5.0,
        source: str = "",
        sleep: Optional[Callable[[float], None]] = None,
    ) -> ModelStatus:
        if self._status is not ModelStatus.UNINITIALIZED:
            logger.warning(f"Ignoring model load request in state {self._status.value}")
            return self._status

        self._status = ModelStatus.LOADING
        try:
            model = retry_with_delay(
                loader,
                attempts=attempts,
                delay=delay,
                sleep=sleep or time.sleep,
                on_attempt=lambda n: logger.info(f"Attempt {n} to load model from {source}"),
            )
        except RetryError:
            logger.error("Failed to load model after multiple attempts.")
            self._status = ModelStatus.UNAVAILABLE
            return self._status

        self._model = model
        self._status = ModelStatus.READY
        logger.info("Model loaded successfully; status is ready")
        return self._status

    def describe(self) -> dict[str, str]:
        if self.is_ready:
            return {"status": "ready", "message": "Model loaded and ready for predictions"}
        return {"status": "not ready", "message": "Model not loaded yet"}


def load_from_settings(holder: ModelHolder, settings) -> ModelStatus:
    """Populate ``holder`` from the configured remote artifact."""
    return holder.load(
        lambda: download_model(settings.artifact_url, timeout=settings.download_timeout),
        attempts=settings.load_attempts,
        delay=settings.load_delay,
        source=settings.artifact_url,
    )


__all__ = ["ModelHolder", "ModelStatus", "download_model", "load_from_settings"]
