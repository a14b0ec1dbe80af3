"""Request orchestration for the predict endpoint."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from ..utils.logger import get_logger
from .classifier import DECISION_THRESHOLD, predict
from .errors import PredictionError
from .models import ModelHolder
from .recorder import PredictionRecord, PredictionRecorder

logger = get_logger(__name__)


class OutcomeKind(str, enum.Enum):
    SUCCESS = "success"
    MODEL_NOT_READY = "model_not_ready"
    NO_FILE = "no_file"
    FAILED = "failed"


@dataclass(frozen=True)
class PredictionOutcome:
    kind: OutcomeKind
    record: Optional[PredictionRecord] = None


def run_prediction(
    holder: ModelHolder,
    image_bytes: Optional[bytes],
    recorder: PredictionRecorder,
    threshold: float = DECISION_THRESHOLD,
) -> PredictionOutcome:
    """Classify an upload and store the result; every failure becomes ``FAILED``."""
    if not holder.is_ready:
        return PredictionOutcome(OutcomeKind.MODEL_NOT_READY)
    if image_bytes is None:
        return PredictionOutcome(OutcomeKind.NO_FILE)

    try:
        prediction = predict(holder.model, image_bytes, threshold)
        record = recorder.record(prediction.result.value, prediction.suggestion)
    except PredictionError:
        logger.exception("Error during prediction")
        return PredictionOutcome(OutcomeKind.FAILED)
    except Exception:
        logger.exception("Unexpected error during prediction")
        return PredictionOutcome(OutcomeKind.FAILED)
    return PredictionOutcome(OutcomeKind.SUCCESS, record)
