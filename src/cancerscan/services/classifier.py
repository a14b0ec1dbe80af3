"""Binary cancer classifier: forward pass, threshold and suggestion lookup."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import torch

from ..utils.logger import get_logger
from .errors import InferenceError, ModelNotReadyError
from .preprocess import transform_image_bytes

logger = get_logger(__name__)

DECISION_THRESHOLD = 0.7


class Label(str, enum.Enum):
    CANCER = "Cancer"
    NON_CANCER = "Non-cancer"


SUGGESTIONS = {
    Label.CANCER: "Segera periksa ke dokter!",
    Label.NON_CANCER: "Penyakit kanker tidak terdeteksi.",
}


@dataclass(slots=True)
class Prediction:
    result: Label
    suggestion: str
    score: float


def classify_score(score: float, threshold: float = DECISION_THRESHOLD) -> Label:
    """Scores strictly above ``threshold`` are cancer."""
    return Label.CANCER if score > threshold else Label.NON_CANCER


def run_model(model: Callable[[torch.Tensor], torch.Tensor], tensor: torch.Tensor) -> float:
    """Forward ``tensor`` and return the first scalar of the output."""
    try:
        with torch.no_grad():
            output = model(tensor)
        if isinstance(output, torch.Tensor):
            output = output.detach().cpu().numpy()
        values = np.asarray(output, dtype=np.float64).ravel()
    except Exception as exc:
        raise InferenceError(f"Model invocation failed: {exc}") from exc
    if values.size == 0:
        raise InferenceError("Model returned an empty output")
    logger.info(f"Model predictions: {values.tolist()}")
    return float(values[0])


def predict(
    model: Optional[Callable[[torch.Tensor], torch.Tensor]],
    image_bytes: bytes,
    threshold: float = DECISION_THRESHOLD,
) -> Prediction:
    """Run the full image-to-label pipeline for one uploaded image."""
    if model is None:
        raise ModelNotReadyError("Model is not loaded")
    tensor = transform_image_bytes(image_bytes)
    logger.debug(f"Input tensor shape: {tuple(tensor.shape)}")
    score = run_model(model, tensor)
    label = classify_score(score, threshold)
    logger.info(f"Predicted result: {label.value}")
    return Prediction(result=label, suggestion=SUGGESTIONS[label], score=score)


__all__ = ["Label", "Prediction", "SUGGESTIONS", "classify_score", "predict", "run_model"]
