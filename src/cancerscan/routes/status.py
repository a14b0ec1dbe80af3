"""Model readiness endpoint."""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_model_holder
from ..services.models import ModelHolder

router = APIRouter()


@router.get("/status", status_code=status.HTTP_200_OK)
async def model_status(holder: ModelHolder = Depends(get_model_holder)) -> dict:
    """Report whether the classifier is loaded and ready for predictions."""
    return holder.describe()
