"""HTTP-level errors and their JSON handlers."""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .utils.logger import get_logger

logger = get_logger(__name__)


class UploadRejected(Exception):
    """An upload failed validation before reaching the prediction pipeline."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def fail_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "fail", "message": message})


async def upload_rejected_handler(request: Request, exc: UploadRejected) -> JSONResponse:
    logger.warning(f"Rejected upload to {request.url.path}: {exc.message}")
    return fail_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
    return fail_response(status.HTTP_400_BAD_REQUEST, "Terjadi kesalahan dalam melakukan prediksi")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UploadRejected, upload_rejected_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
