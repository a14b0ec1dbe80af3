"""Endpoint for image-based cancer prediction."""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..dependencies import get_app_settings, get_model_holder, get_recorder
from ..errors import UploadRejected, fail_response
from ..services.models import ModelHolder
from ..services.predictions import OutcomeKind, PredictionOutcome, run_prediction
from ..services.recorder import PredictionRecorder

router = APIRouter()

FAILURE_RESPONSES = {
    OutcomeKind.MODEL_NOT_READY: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Model belum dimuat. Silakan cek status model dengan endpoint /status.",
    ),
    OutcomeKind.NO_FILE: (
        status.HTTP_400_BAD_REQUEST,
        "No file uploaded. Please provide an image for prediction.",
    ),
    OutcomeKind.FAILED: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Terjadi kesalahan dalam melakukan prediksi.",
    ),
}


async def read_upload(upload: Optional[UploadFile], max_bytes: int) -> Optional[bytes]:
    """Return the upload's bytes after the mimetype and size checks."""
    if upload is None:
        return None
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise UploadRejected(status.HTTP_400_BAD_REQUEST, "File must be an image")
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadRejected(
            413,
            f"Payload content length greater than maximum allowed: {max_bytes}",
        )
    return data


def outcome_response(outcome: PredictionOutcome) -> JSONResponse:
    if outcome.kind is OutcomeKind.SUCCESS and outcome.record is not None:
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={
                "status": "success",
                "message": "Model is predicted successfully",
                "data": outcome.record.to_dict(),
            },
        )
    status_code, message = FAILURE_RESPONSES[outcome.kind]
    return fail_response(status_code, message)


@router.post("/predict", status_code=status.HTTP_201_CREATED)
async def predict_image(
    image: Optional[UploadFile] = File(default=None),
    holder: ModelHolder = Depends(get_model_holder),
    recorder: PredictionRecorder = Depends(get_recorder),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Classify an uploaded image and store the prediction."""
    image_bytes = await read_upload(image, settings.max_upload_bytes)
    outcome = await run_in_threadpool(
        run_prediction, holder, image_bytes, recorder, settings.decision_threshold
    )
    return outcome_response(outcome)
