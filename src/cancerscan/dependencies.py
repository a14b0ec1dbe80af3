"""FastAPI dependencies shared by the route modules."""
from functools import partial

from fastapi import Depends, Request

from .config import Settings, settings
from .services.models import ModelHolder
from .services.recorder import PredictionRecorder, get_firestore_client


def get_model_holder(request: Request) -> ModelHolder:
    return request.app.state.model_holder


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", settings)


def get_recorder(app_settings: Settings = Depends(get_app_settings)) -> PredictionRecorder:
    client_factory = partial(
        get_firestore_client, app_settings.credentials_path, app_settings.firestore_project
    )
    return PredictionRecorder(client_factory, app_settings.predictions_collection)
